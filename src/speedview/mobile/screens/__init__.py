"""Screen modules for SpeedView mobile UI."""

from .map_screen import MapScreen
from .root_screen import RootScreen
from .speed_screen import SpeedScreen

__all__ = ["MapScreen", "RootScreen", "SpeedScreen"]
