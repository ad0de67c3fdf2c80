"""
Android positioning provider.

Uses the python-for-android permission API and plyer's GPS facade. Both are
only importable inside an Android build, so they are imported when first used.
"""

import logging
from typing import Any

from ..core.samples import Coordinate, LocationSample
from .base import LocationProviderBase, PermissionCallback

logger = logging.getLogger(__name__)


def location_from_plyer(**kwargs: Any) -> LocationSample:
    """
    Build a LocationSample from plyer's on_location keyword arguments.

    plyer reports lat, lon, speed, bearing, altitude and accuracy. Missing
    values map to the LocationSample "invalid" defaults.
    """
    return LocationSample(
        coordinate=Coordinate(latitude=float(kwargs["lat"]), longitude=float(kwargs["lon"])),
        speed=float(kwargs.get("speed", -1.0)),
        horizontal_accuracy=float(kwargs.get("accuracy", -1.0)),
        altitude=float(kwargs.get("altitude", 0.0)),
        course=float(kwargs.get("bearing", -1.0)),
    )


class AndroidLocationProvider(LocationProviderBase):
    """
    Android location service via plyer.

    plyer has no true-heading stream, so no heading updates are emitted.
    """

    def __init__(self, config: dict):
        """
        Initialize the Android provider.

        Args:
            config: Android configuration dict with keys:
                - interval: Minimum time between fixes in milliseconds
                - distance: Minimum distance between fixes in meters
        """
        super().__init__()
        self.interval = int(config.get("interval", 1000))
        self.distance = float(config.get("distance", 0))

    def request_permission(self, on_result: PermissionCallback) -> None:
        """Request fine (GPS) location access."""
        from android.permissions import Permission, request_permissions

        def _on_permissions(permissions, grants):
            granted = bool(grants) and all(grants)
            logger.info(f"Android location permission granted: {granted}")
            on_result(granted)

        request_permissions(
            [Permission.ACCESS_FINE_LOCATION, Permission.ACCESS_COARSE_LOCATION],
            _on_permissions,
        )

    def _start(self) -> None:
        from plyer import gps

        gps.configure(on_location=self._on_location, on_status=self._on_status)
        gps.start(minTime=self.interval, minDistance=self.distance)

    def _stop(self) -> None:
        from plyer import gps

        gps.stop()
        logger.info("AndroidLocationProvider stopped")

    def _on_location(self, **kwargs: Any) -> None:
        self._emit_locations([location_from_plyer(**kwargs)])

    def _on_status(self, stype: str, status: Any) -> None:
        logger.info(f"Android GPS status: {stype}={status}")
