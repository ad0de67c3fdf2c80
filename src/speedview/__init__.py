"""
SpeedView - GPS Speedometer

Cross-platform app showing real-time GPS speed on a circular gauge and the
current position on a map with a speed/altitude/heading overlay.
"""

__version__ = "0.1.0"
__author__ = "SpeedView Team"

from .core.location_source import LocationSource
from .core.samples import HeadingSample, LocationSample, LocationState
from .core.units import SpeedUnit

__all__ = ["LocationSource", "LocationSample", "HeadingSample", "LocationState", "SpeedUnit", "__version__"]
