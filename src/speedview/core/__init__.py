"""Core components for SpeedView."""

from .config import Config
from .location_source import LocationSource
from .samples import Coordinate, HeadingSample, LocationSample, LocationState
from .signal import signal_bars
from .units import SpeedUnit, convert, gauge_fraction

__all__ = [
    "Config",
    "Coordinate",
    "HeadingSample",
    "LocationSample",
    "LocationSource",
    "LocationState",
    "SpeedUnit",
    "convert",
    "gauge_fraction",
    "signal_bars",
]
