"""
Speed screen for SpeedView.

Circular gauge with the current speed, a signal-strength indicator and the
speed-unit picker.
"""

import logging
from typing import Callable

from kivy.uix.anchorlayout import AnchorLayout
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.widget import Widget

from ...core.location_source import LocationSource
from ...core.samples import LocationState
from ...core.units import SpeedUnit
from ..widgets.signal_bars import SignalBars
from ..widgets.speed_gauge import SpeedGauge
from ..widgets.unit_selector import UnitSelector

logger = logging.getLogger(__name__)


class SpeedScreen(BoxLayout):
    """
    Speedometer tab.

    Layout:
    ┌─────────────────────────────────────┐
    │                               ▂▄▆█  │
    │                                     │
    │             ╭────────╮              │
    │             │  36.0  │              │
    │             │  km/h  │              │
    │             ╰────────╯              │
    │                                     │
    │      [ m/s ][ km/h ][ mph ]         │
    └─────────────────────────────────────┘
    """

    def __init__(
        self,
        location_source: LocationSource,
        unit: SpeedUnit = SpeedUnit.MPS,
        on_unit_change: Callable[[SpeedUnit], None] | None = None,
        **kwargs,
    ):
        """
        Initialize the speed screen.

        Args:
            location_source: Shared LocationSource owned by the root screen.
            unit: Initially selected speed unit.
            on_unit_change: Called when the user picks another unit.
        """
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("padding", [20, 20, 20, 20])
        kwargs.setdefault("spacing", 10)
        super().__init__(**kwargs)

        self.location_source = location_source
        self.unit = unit
        self.on_unit_change = on_unit_change

        self._create_ui()

        self._listener = self.location_source.subscribe(self._on_state)
        self._render(self.location_source.state)

    def _create_ui(self):
        """Create all UI components."""
        # Signal bars (top-right)
        header = AnchorLayout(anchor_x="right", anchor_y="top", size_hint_y=None, height=40)
        self.signal_bars = SignalBars()
        header.add_widget(self.signal_bars)
        self.add_widget(header)

        # Gauge (centered)
        gauge_area = AnchorLayout(anchor_x="center", anchor_y="center")
        self.gauge = SpeedGauge()
        gauge_area.add_widget(self.gauge)
        self.add_widget(gauge_area)

        # Unit picker
        self.unit_selector = UnitSelector(unit=self.unit, on_change=self._on_unit_selected)
        self.add_widget(self.unit_selector)

        # Spacer
        self.add_widget(Widget(size_hint_y=0.2))

    def _on_state(self, state: LocationState) -> None:
        self._render(state)

    def _render(self, state: LocationState) -> None:
        self.gauge.update(state.speed, self.unit)
        self.signal_bars.bars = state.signal_bars

    def _on_unit_selected(self, unit: SpeedUnit) -> None:
        if self.on_unit_change:
            self.on_unit_change(unit)
        else:
            self.set_unit(unit)

    def set_unit(self, unit: SpeedUnit) -> None:
        """
        Switch the display unit.

        Args:
            unit: New speed unit.
        """
        self.unit = unit
        self.unit_selector.set_unit(unit)
        self._render(self.location_source.state)

    def detach(self) -> None:
        """Stop listening for location changes."""
        self.location_source.unsubscribe(self._listener)
