"""
Positioning provider interface.

A provider wraps one positioning back-end (gpsd, a replay file, the Android
location service) behind a subscribe/unsubscribe interface. The stream starts
with the first subscription and stops when the last one is removed.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence, runtime_checkable

from ..core.samples import HeadingSample, LocationSample

logger = logging.getLogger(__name__)

LocationCallback = Callable[[Sequence[LocationSample]], None]
HeadingCallback = Callable[[HeadingSample], None]
PermissionCallback = Callable[[bool], None]


@dataclass(frozen=True)
class Subscription:
    """Handle returned by LocationProvider.subscribe()."""

    id: int
    on_location: LocationCallback
    on_heading: HeadingCallback


@runtime_checkable
class LocationProvider(Protocol):
    """Protocol for positioning providers."""

    def request_permission(self, on_result: PermissionCallback) -> None:
        """Ask for foreground location access. Calls on_result(granted)."""
        ...

    def subscribe(
        self,
        on_location: LocationCallback,
        on_heading: HeadingCallback,
    ) -> Subscription:
        """Register for location batches and heading updates."""
        ...

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription. Unknown subscriptions are ignored."""
        ...

    @property
    def is_running(self) -> bool:
        """Check if the update stream is running."""
        ...


class LocationProviderBase:
    """
    Subscription bookkeeping shared by the concrete providers.

    Subclasses implement _start() and _stop() and report data through
    _emit_locations() / _emit_heading(), from any thread.
    """

    def __init__(self):
        self._subscriptions: dict[int, Subscription] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._running = False

    def request_permission(self, on_result: PermissionCallback) -> None:
        """Grant access by default; platform providers override this."""
        on_result(True)

    def subscribe(
        self,
        on_location: LocationCallback,
        on_heading: HeadingCallback,
    ) -> Subscription:
        with self._lock:
            subscription = Subscription(next(self._ids), on_location, on_heading)
            self._subscriptions[subscription.id] = subscription
            start = not self._running
            self._running = True

        if start:
            logger.info(f"{type(self).__name__}: starting updates")
            self._start()
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if self._subscriptions.pop(subscription.id, None) is None:
                return
            stop = self._running and not self._subscriptions
            if stop:
                self._running = False

        if stop:
            logger.info(f"{type(self).__name__}: stopping updates")
            self._stop()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _emit_locations(self, samples: Sequence[LocationSample]) -> None:
        if not samples:
            return
        with self._lock:
            targets = list(self._subscriptions.values())
        for subscription in targets:
            subscription.on_location(list(samples))

    def _emit_heading(self, heading: HeadingSample) -> None:
        with self._lock:
            targets = list(self._subscriptions.values())
        for subscription in targets:
            subscription.on_heading(heading)

    def _emit_report(self, report: LocationSample | HeadingSample | None) -> None:
        """Route a decoded gpsd report to the matching callbacks."""
        if isinstance(report, LocationSample):
            self._emit_locations([report])
        elif isinstance(report, HeadingSample):
            self._emit_heading(report)

    def _start(self) -> None:
        raise NotImplementedError

    def _stop(self) -> None:
        raise NotImplementedError
