"""Widget modules for SpeedView mobile UI."""

from .location_info import LocationInfoPanel
from .signal_bars import SignalBars
from .speed_gauge import SpeedGauge
from .unit_selector import UnitSelector

__all__ = ["LocationInfoPanel", "SignalBars", "SpeedGauge", "UnitSelector"]
