"""
Circular speed gauge widget for SpeedView.

A gray ring with a blue arc filled clockwise from twelve o'clock, and the
current speed plus unit label in the middle.
"""

import logging

from kivy.animation import Animation
from kivy.graphics import Color, Line
from kivy.metrics import dp
from kivy.properties import NumericProperty
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.floatlayout import FloatLayout
from kivy.uix.label import Label

from ...core.display import format_speed
from ...core.units import SpeedUnit, gauge_fraction

logger = logging.getLogger(__name__)

RING_COLOR = (0.5, 0.5, 0.5, 0.2)
ARC_COLOR = (0.0, 0.48, 1.0, 1.0)


class SpeedGauge(FloatLayout):
    """
    Speedometer gauge.

    The arc spans `fraction` of the ring, where a full ring is
    GAUGE_FULL_SCALE_MPS. Changes are animated linearly.
    """

    fraction = NumericProperty(0.0)

    def __init__(self, diameter: float = dp(250), line_width: float = dp(10), **kwargs):
        """
        Initialize the gauge.

        Args:
            diameter: Ring diameter in pixels.
            line_width: Ring and arc stroke width in pixels.
        """
        kwargs.setdefault("size_hint", (None, None))
        kwargs.setdefault("size", (diameter + 2 * line_width, diameter + 2 * line_width))
        super().__init__(**kwargs)

        self.diameter = diameter
        self.line_width = line_width
        self._animation: Animation | None = None

        readout = BoxLayout(
            orientation="vertical",
            size_hint=(None, None),
            size=(diameter * 0.7, diameter * 0.5),
            pos_hint={"center_x": 0.5, "center_y": 0.5},
        )
        self._speed_label = Label(text="0.0", font_size="60sp", bold=True, size_hint_y=0.7)
        self._unit_label = Label(text=SpeedUnit.MPS.label, font_size="20sp", size_hint_y=0.3)
        readout.add_widget(self._speed_label)
        readout.add_widget(self._unit_label)
        self.add_widget(readout)

        self._draw_rings()
        self.bind(pos=self._update_rings, size=self._update_rings, fraction=self._update_rings)

    def _draw_rings(self):
        """Draw the background ring and the speed arc."""
        with self.canvas.before:
            Color(*RING_COLOR)
            self._ring = Line(width=self.line_width)
            Color(*ARC_COLOR)
            self._arc = Line(width=self.line_width, cap="round")
        self._update_rings()

    def _update_rings(self, *args):
        """Update ring geometry when position/size/fraction changes."""
        radius = self.diameter / 2
        self._ring.circle = (self.center_x, self.center_y, radius)
        if self.fraction <= 0:
            self._arc.points = []
        else:
            self._arc.circle = (self.center_x, self.center_y, radius, 0, 360 * self.fraction)

    def update(self, speed_mps: float, unit: SpeedUnit) -> None:
        """
        Show a new speed reading.

        Args:
            speed_mps: Speed in meters/second.
            unit: Display unit.
        """
        self._speed_label.text = format_speed(speed_mps, unit)
        self._unit_label.text = unit.label

        target = gauge_fraction(speed_mps, unit)
        if self._animation is not None:
            self._animation.cancel(self)
        self._animation = Animation(fraction=target, duration=0.25, t="linear")
        self._animation.start(self)
