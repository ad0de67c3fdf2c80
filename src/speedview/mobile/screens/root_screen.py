"""
Root screen for SpeedView.

Tab container switching between the speed gauge and the map.
"""

import logging

from kivy.uix.tabbedpanel import TabbedPanel, TabbedPanelItem

from ...core.config import Config
from ...core.location_source import LocationSource
from ...core.units import SpeedUnit
from .map_screen import MapScreen
from .speed_screen import SpeedScreen

logger = logging.getLogger(__name__)

SPEED_TAB = 0
MAP_TAB = 1


class RootScreen(TabbedPanel):
    """
    Two-tab root view.

    Owns the LocationSource and the UI selection state (speed unit and tab
    index) and passes them to the child screens. Neither is persisted.
    """

    def __init__(
        self,
        location_source: LocationSource,
        config: Config,
        **kwargs,
    ):
        """
        Initialize the root screen.

        Args:
            location_source: LocationSource shared by both tabs.
            config: Application configuration.
        """
        kwargs.setdefault("do_default_tab", False)
        kwargs.setdefault("tab_pos", "bottom_mid")
        kwargs.setdefault("tab_width", 160)
        super().__init__(**kwargs)

        self.location_source = location_source
        self.config = config
        self.selected_unit = SpeedUnit.parse(str(config.get("display.unit", "mps")))
        self.selected_tab = SPEED_TAB

        self._create_ui()

    def _create_ui(self):
        """Create the tabs."""
        self.speed_screen = SpeedScreen(
            location_source=self.location_source,
            unit=self.selected_unit,
            on_unit_change=self.set_unit,
        )
        self.speed_tab = TabbedPanelItem(text="Speed")
        self.speed_tab.add_widget(self.speed_screen)
        self.add_widget(self.speed_tab)

        self.map_screen = MapScreen(
            location_source=self.location_source,
            config=self.config,
            unit=self.selected_unit,
        )
        self.map_tab = TabbedPanelItem(text="Map")
        self.map_tab.add_widget(self.map_screen)
        self.add_widget(self.map_tab)

        self._tabs = [self.speed_tab, self.map_tab]
        self.default_tab = self.speed_tab
        self.select_tab(self.selected_tab)
        self.bind(current_tab=self._on_current_tab)

    def _on_current_tab(self, instance, tab):
        if tab in self._tabs:
            self.selected_tab = self._tabs.index(tab)
            logger.debug(f"Selected tab: {tab.text}")

    def select_tab(self, index: int) -> None:
        """
        Switch to a tab by index.

        Args:
            index: SPEED_TAB or MAP_TAB.
        """
        self.switch_to(self._tabs[index])

    def set_unit(self, unit: SpeedUnit) -> None:
        """
        Change the shared speed unit and propagate it to both tabs.

        Args:
            unit: New speed unit.
        """
        if unit is self.selected_unit:
            return
        self.selected_unit = unit
        self.speed_screen.set_unit(unit)
        self.map_screen.set_unit(unit)
        logger.info(f"Speed unit changed to {unit.label}")

    def detach(self) -> None:
        """Detach child screens from the LocationSource."""
        self.speed_screen.detach()
        self.map_screen.detach()
