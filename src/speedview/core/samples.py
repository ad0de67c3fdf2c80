"""
Positioning data structures.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from .signal import signal_bars


@dataclass(frozen=True)
class Coordinate:
    """Geographic coordinate in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationSample:
    """
    A single fix as reported by a positioning provider.

    Values are kept exactly as the provider reported them. Negative speed,
    horizontal_accuracy and course mean "invalid"; LocationSource normalizes
    them when the sample is applied.

    Attributes:
        coordinate: Reported position
        speed: Ground speed in meters/second
        horizontal_accuracy: Uncertainty radius in meters (lower is better)
        altitude: Altitude in meters
        course: Direction of travel in degrees from true north
        timestamp: Time of the fix, if the provider reports one
    """

    coordinate: Coordinate
    speed: float = -1.0
    horizontal_accuracy: float = -1.0
    altitude: float = 0.0
    course: float = -1.0
    timestamp: datetime | None = None

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


@dataclass(frozen=True)
class HeadingSample:
    """Device orientation relative to true north, in degrees."""

    true_heading: float
    timestamp: datetime | None = None


@dataclass(frozen=True)
class LocationState:
    """
    Snapshot of everything the UI renders.

    Replaced as a whole on every update; only the latest snapshot is kept.
    """

    speed: float = 0.0
    horizontal_accuracy: int | None = None
    location: LocationSample | None = None
    heading: HeadingSample | None = None
    course: float | None = None

    @property
    def signal_bars(self) -> int:
        """Number of lit signal bars (0-4)."""
        return signal_bars(self.horizontal_accuracy)

    @property
    def has_fix(self) -> bool:
        """Check if at least one location sample has been applied."""
        return self.location is not None

    def evolve(self, **changes: Any) -> "LocationState":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
