"""
Location info overlay widget for SpeedView.

Displays speed, altitude, coordinates, heading and course in a
semi-transparent panel on top of the map.
"""

import logging

from kivy.graphics import Color, RoundedRectangle
from kivy.metrics import dp
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label

from ...core.display import info_lines
from ...core.samples import LocationState
from ...core.units import SpeedUnit

logger = logging.getLogger(__name__)


class LocationInfoPanel(BoxLayout):
    """
    Overlay panel listing the current location values.

    Layout:
    ┌──────────────────────────┐
    │  Speed: 36.0 km/h        │
    │  Altitude: 41.2 m        │
    │  Latitude: 35.676200°    │
    │  Longitude: 139.650300°  │
    │  Heading: 87.5°          │
    │  Course: 90.0°           │
    └──────────────────────────┘
    """

    def __init__(self, **kwargs):
        """Initialize the info panel."""
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("size_hint", (None, None))
        kwargs.setdefault("width", dp(240))
        kwargs.setdefault("padding", [15, 10, 15, 10])
        super().__init__(**kwargs)

        self._label = Label(
            text="",
            font_size="14sp",
            color=(1, 1, 1, 1),
            halign="left",
            valign="top",
            line_height=1.2,
            size_hint_y=None,
        )
        self._label.bind(width=self._wrap_text, texture_size=self._fit_to_text)
        self.add_widget(self._label)

        self._draw_background()
        self.bind(pos=self._update_background, size=self._update_background)

        self.update(LocationState(), SpeedUnit.MPS)

    def _draw_background(self):
        """Draw semi-transparent background with rounded corners."""
        with self.canvas.before:
            Color(0, 0, 0, 0.7)
            self._bg_rect = RoundedRectangle(pos=self.pos, size=self.size, radius=[10])

    def _update_background(self, *args):
        """Update background when position/size changes."""
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size

    def _wrap_text(self, instance, width):
        instance.text_size = (width, None)

    def _fit_to_text(self, instance, texture_size):
        """Grow or shrink the panel to the height of the text."""
        instance.height = texture_size[1]
        self.height = texture_size[1] + self.padding[1] + self.padding[3]

    def update(self, state: LocationState, unit: SpeedUnit) -> None:
        """
        Update the panel with the latest location state.

        Args:
            state: Current LocationState.
            unit: Unit for the speed line.
        """
        self._label.text = "\n".join(info_lines(state, unit))
