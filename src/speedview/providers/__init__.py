"""Positioning providers for SpeedView."""

import logging
from typing import Any

from .android import AndroidLocationProvider
from .base import LocationProvider, LocationProviderBase, Subscription
from .gpsd import GpsdLocationProvider
from .replay import ReplayLocationProvider

logger = logging.getLogger(__name__)

PROVIDERS = {
    "gpsd": GpsdLocationProvider,
    "replay": ReplayLocationProvider,
    "android": AndroidLocationProvider,
}


def get_location_provider(config: dict[str, Any], platform_type: str = "desktop") -> LocationProvider:
    """
    Factory function to get the positioning provider for the current platform.

    Args:
        config: The 'location' configuration section.
        platform_type: Platform type ("desktop", "android").

    Returns:
        LocationProvider instance.

    Raises:
        ValueError: If location.provider names no known provider.
    """
    name = str(config.get("provider", "auto")).lower()
    if name == "auto":
        name = "android" if platform_type == "android" else "gpsd"

    provider_cls = PROVIDERS.get(name)
    if provider_cls is None:
        raise ValueError(
            f"Unknown location provider {name!r}; expected one of: auto, {', '.join(PROVIDERS)}"
        )

    logger.info(f"Using {provider_cls.__name__}")
    return provider_cls(config.get(name) or {})


__all__ = [
    "AndroidLocationProvider",
    "GpsdLocationProvider",
    "LocationProvider",
    "LocationProviderBase",
    "ReplayLocationProvider",
    "Subscription",
    "get_location_provider",
]
