"""
Decoding of gpsd JSON reports.

gpsd streams one JSON object per line once a client sends the WATCH command.
Only two report classes matter here:
- TPV (time/position/velocity) -> LocationSample
- ATT (attitude) -> HeadingSample

gpsd omits fields it cannot compute; missing values are mapped to the negative
"invalid" sentinels used by LocationSample.
"""

import json
import logging
import math
from datetime import datetime
from typing import Any

from .samples import Coordinate, HeadingSample, LocationSample

logger = logging.getLogger(__name__)

WATCH_COMMAND = b'?WATCH={"enable":true,"json":true};\n'

# TPV "mode": 0/1 = no fix, 2 = 2D fix, 3 = 3D fix
MIN_FIX_MODE = 2


def _number(payload: dict[str, Any], key: str) -> float | None:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # json.loads accepts NaN and Infinity
    if not math.isfinite(value):
        return None
    return float(value)


def _parse_time(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _horizontal_accuracy(payload: dict[str, Any]) -> float:
    eph = _number(payload, "eph")
    if eph is not None:
        return eph
    epx = _number(payload, "epx")
    epy = _number(payload, "epy")
    if epx is not None and epy is not None:
        return max(epx, epy)
    return -1.0


def _altitude(payload: dict[str, Any]) -> float:
    for key in ("altMSL", "alt", "altHAE"):
        value = _number(payload, key)
        if value is not None:
            return value
    return 0.0


def location_from_tpv(payload: dict[str, Any]) -> LocationSample | None:
    """
    Convert a TPV report into a LocationSample.

    Returns:
        LocationSample, or None if the report carries no 2D/3D fix.
    """
    mode = payload.get("mode", 0)
    if not isinstance(mode, int) or mode < MIN_FIX_MODE:
        return None

    lat = _number(payload, "lat")
    lon = _number(payload, "lon")
    if lat is None or lon is None:
        return None

    speed = _number(payload, "speed")
    track = _number(payload, "track")

    return LocationSample(
        coordinate=Coordinate(latitude=lat, longitude=lon),
        speed=speed if speed is not None else -1.0,
        horizontal_accuracy=_horizontal_accuracy(payload),
        altitude=_altitude(payload),
        course=track if track is not None else -1.0,
        timestamp=_parse_time(payload.get("time")),
    )


def heading_from_att(payload: dict[str, Any]) -> HeadingSample | None:
    """Convert an ATT report into a HeadingSample, if it carries a heading."""
    heading = _number(payload, "heading")
    if heading is None:
        return None
    return HeadingSample(true_heading=heading, timestamp=_parse_time(payload.get("time")))


def parse_report(line: str | bytes) -> LocationSample | HeadingSample | None:
    """
    Decode one line of gpsd output.

    Args:
        line: Raw JSON line as received from gpsd.

    Returns:
        LocationSample for usable TPV reports, HeadingSample for ATT reports
        with a heading, None for anything else.
    """
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")
    line = line.strip()
    if not line:
        return None

    try:
        payload = json.loads(line)
    except json.JSONDecodeError:
        logger.debug(f"Skipping undecodable gpsd line: {line[:80]!r}")
        return None

    if not isinstance(payload, dict):
        return None

    report_class = payload.get("class")
    if report_class == "TPV":
        return location_from_tpv(payload)
    if report_class == "ATT":
        return heading_from_att(payload)
    return None
