"""
Speed units and gauge scaling.
"""

from enum import Enum

# Full-scale reading of the circular gauge, in meters/second.
GAUGE_FULL_SCALE_MPS = 50.0


class SpeedUnit(Enum):
    """Display unit for speed. Values are the on-screen labels."""

    MPS = "m/s"
    KMH = "km/h"
    MPH = "mph"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value

    @property
    def factor(self) -> float:
        """Multiplier converting meters/second into this unit."""
        return _FACTORS[self]

    def convert(self, speed_mps: float) -> float:
        """Convert a speed in meters/second into this unit."""
        return speed_mps * self.factor

    @classmethod
    def parse(cls, text: str) -> "SpeedUnit":
        """
        Parse a unit from its name ('kmh') or its label ('km/h').

        Raises:
            ValueError: If text names no known unit.
        """
        key = text.strip()
        for unit in cls:
            if key.lower() == unit.name.lower() or key == unit.value:
                return unit
        raise ValueError(f"Unknown speed unit: {text!r}")


_FACTORS = {
    SpeedUnit.MPS: 1.0,
    SpeedUnit.KMH: 3.6,
    SpeedUnit.MPH: 2.23694,
}


def convert(speed_mps: float, unit: SpeedUnit) -> float:
    """Convert a speed in meters/second into the given unit."""
    return unit.convert(speed_mps)


def gauge_fraction(
    speed_mps: float,
    unit: SpeedUnit,
    full_scale_mps: float = GAUGE_FULL_SCALE_MPS,
) -> float:
    """
    Fraction of the gauge arc to fill, clamped to [0, 1].

    Both the speed and the full-scale reference are converted into the display
    unit before dividing, so the result does not depend on the unit.
    """
    fraction = unit.convert(max(speed_mps, 0.0)) / unit.convert(full_scale_mps)
    return max(0.0, min(fraction, 1.0))
