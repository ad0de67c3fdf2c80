"""
Segmented speed-unit picker for SpeedView.
"""

import logging
from typing import Callable

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.togglebutton import ToggleButton

from ...core.units import SpeedUnit

logger = logging.getLogger(__name__)


class UnitSelector(BoxLayout):
    """Row of toggle buttons, one per SpeedUnit; exactly one is selected."""

    def __init__(
        self,
        unit: SpeedUnit = SpeedUnit.MPS,
        on_change: Callable[[SpeedUnit], None] | None = None,
        **kwargs,
    ):
        """
        Initialize the selector.

        Args:
            unit: Initially selected unit.
            on_change: Called with the new unit when the user picks one.
        """
        kwargs.setdefault("orientation", "horizontal")
        kwargs.setdefault("size_hint_y", None)
        kwargs.setdefault("height", 44)
        kwargs.setdefault("spacing", 2)
        super().__init__(**kwargs)

        self.on_change = on_change
        self._buttons: dict[SpeedUnit, ToggleButton] = {}

        for option in SpeedUnit:
            button = ToggleButton(
                text=option.label,
                group=f"speed_unit_{id(self)}",
                state="down" if option is unit else "normal",
                allow_no_selection=False,
                font_size="16sp",
            )
            button.bind(on_press=lambda instance, option=option: self._on_press(option))
            self._buttons[option] = button
            self.add_widget(button)

    def _on_press(self, unit: SpeedUnit):
        logger.info(f"Speed unit selected: {unit.label}")
        if self.on_change:
            self.on_change(unit)

    def set_unit(self, unit: SpeedUnit) -> None:
        """Select a unit programmatically (without triggering on_change)."""
        for option, button in self._buttons.items():
            button.state = "down" if option is unit else "normal"
