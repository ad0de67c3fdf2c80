"""
Text formatting for the speed readout and the map info panel.
"""

from .samples import LocationState
from .units import SpeedUnit

DEGREE = "°"


def format_speed(speed_mps: float, unit: SpeedUnit) -> str:
    """Format a speed for display with one decimal place."""
    return f"{unit.convert(max(speed_mps, 0.0)):.1f}"


def info_lines(state: LocationState, unit: SpeedUnit) -> list[str]:
    """
    Build the lines shown in the map info panel.

    Speed is always present. Position lines appear once a fix exists, and the
    heading and course lines only when those values are known.
    """
    lines = [f"Speed: {format_speed(state.speed, unit)} {unit.label}"]

    if state.location is not None:
        location = state.location
        lines.append(f"Altitude: {location.altitude:.1f} m")
        lines.append(f"Latitude: {location.latitude:.6f}{DEGREE}")
        lines.append(f"Longitude: {location.longitude:.6f}{DEGREE}")

    if state.heading is not None:
        lines.append(f"Heading: {state.heading.true_heading:.1f}{DEGREE}")

    if state.course is not None:
        lines.append(f"Course: {state.course:.1f}{DEGREE}")

    return lines
