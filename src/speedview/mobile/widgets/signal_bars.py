"""
Signal strength indicator widget for SpeedView.
"""

from kivy.graphics import Color, Rectangle
from kivy.metrics import dp
from kivy.properties import NumericProperty
from kivy.uix.widget import Widget

from ...core.signal import MAX_SIGNAL_BARS, SIGNAL_BAR_COUNT

LIT_COLOR = (0.2, 0.8, 0.2, 1.0)
UNLIT_COLOR = (0.5, 0.5, 0.5, 0.3)


class SignalBars(Widget):
    """Five bottom-aligned bars of increasing height; the first `bars` are lit."""

    bars = NumericProperty(0)

    def __init__(self, bar_width: float = dp(4), spacing: float = dp(2), step: float = dp(4), **kwargs):
        kwargs.setdefault("size_hint", (None, None))
        kwargs.setdefault(
            "size",
            (SIGNAL_BAR_COUNT * bar_width + (SIGNAL_BAR_COUNT - 1) * spacing, SIGNAL_BAR_COUNT * step),
        )
        super().__init__(**kwargs)

        self.bar_width = bar_width
        self.spacing = spacing
        self.step = step

        self.bind(pos=self._redraw, size=self._redraw, bars=self._redraw)
        self._redraw()

    def _redraw(self, *args):
        self.canvas.clear()
        with self.canvas:
            for index in range(SIGNAL_BAR_COUNT):
                Color(*(LIT_COLOR if index < min(self.bars, MAX_SIGNAL_BARS) else UNLIT_COLOR))
                Rectangle(
                    pos=(self.x + index * (self.bar_width + self.spacing), self.y),
                    size=(self.bar_width, (index + 1) * self.step),
                )
