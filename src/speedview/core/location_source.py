"""
Observable location state for SpeedView.

LocationSource sits between a positioning provider and the UI: it turns raw
provider callbacks into a single LocationState snapshot and notifies
subscribed views whenever that snapshot changes.
"""

import itertools
import logging
import math
from typing import Callable, Sequence

from ..providers.base import LocationProvider, Subscription
from .samples import Coordinate, HeadingSample, LocationSample, LocationState

logger = logging.getLogger(__name__)

StateListener = Callable[[LocationState], None]
Dispatcher = Callable[[Callable[[], None]], None]


def _call_inline(callback: Callable[[], None]) -> None:
    callback()


class LocationSource:
    """
    Location/heading state store fed by a LocationProvider.

    Only the most recent sample is kept: every location batch and heading
    update replaces the current snapshot and triggers one notification.

    Usage:
        source = LocationSource(provider)
        handle = source.subscribe(lambda state: print(state.speed))
        source.activate()
        ...
        source.unsubscribe(handle)
        source.deactivate()
    """

    def __init__(
        self,
        provider: LocationProvider,
        dispatch: Dispatcher | None = None,
    ):
        """
        Initialize the location source.

        Args:
            provider: Positioning provider to read from.
            dispatch: Called with a zero-argument callable for every provider
                callback. The Kivy app uses it to move updates onto the UI
                thread. Defaults to running the callable immediately.
        """
        self.provider = provider
        self._dispatch = dispatch or _call_inline

        self._state = LocationState()
        self._listeners: dict[int, StateListener] = {}
        self._handles = itertools.count(1)

        self._subscription: Subscription | None = None
        self._activated = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def activate(self) -> None:
        """Request location permission, then start receiving updates."""
        if self._activated:
            logger.debug("LocationSource already active")
            return

        self._activated = True
        logger.info(f"Requesting location permission from {type(self.provider).__name__}")
        self.provider.request_permission(
            lambda granted: self._dispatch(lambda: self._on_permission_result(granted))
        )

    def deactivate(self) -> None:
        """Stop receiving updates. Current state is kept."""
        self._activated = False
        if self._subscription is not None:
            self.provider.unsubscribe(self._subscription)
            self._subscription = None
            logger.info("LocationSource unsubscribed from provider")

    def _on_permission_result(self, granted: bool) -> None:
        if not granted:
            logger.warning("Location permission not granted; no updates will arrive")
            return
        if not self._activated or self._subscription is not None:
            return

        self._subscription = self.provider.subscribe(
            on_location=lambda samples: self._dispatch(lambda: self.on_location_batch(samples)),
            on_heading=lambda heading: self._dispatch(lambda: self.on_heading_update(heading)),
        )
        logger.info("LocationSource subscribed to location and heading updates")

    @property
    def is_active(self) -> bool:
        """Check if the source is currently subscribed to its provider."""
        return self._subscription is not None

    # ------------------------------------------------------------------
    # Provider callbacks
    # ------------------------------------------------------------------

    def on_location_batch(self, samples: Sequence[LocationSample]) -> None:
        """
        Apply a batch of location samples.

        Only the last sample of the batch is used. Negative speed and course
        are the provider's "invalid" markers: speed falls back to 0 and
        course becomes unknown. A non-finite accuracy is stored as -1.
        """
        if not samples:
            return

        sample = samples[-1]
        accuracy = sample.horizontal_accuracy
        self._set_state(
            self._state.evolve(
                speed=sample.speed if sample.speed >= 0 else 0.0,
                horizontal_accuracy=int(accuracy) if math.isfinite(accuracy) else -1,
                location=sample,
                course=sample.course if sample.course >= 0 else None,
            )
        )

    def on_heading_update(self, heading: HeadingSample) -> None:
        """Replace the stored heading."""
        self._set_state(self._state.evolve(heading=heading))

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> int:
        """
        Register a listener called with the new state after every change.

        Returns:
            Handle to pass to unsubscribe().
        """
        handle = next(self._handles)
        self._listeners[handle] = listener
        return handle

    def unsubscribe(self, handle: int) -> None:
        """Remove a listener. Unknown handles are ignored."""
        self._listeners.pop(handle, None)

    def _set_state(self, state: LocationState) -> None:
        self._state = state
        for listener in list(self._listeners.values()):
            try:
                listener(state)
            except Exception:
                logger.exception("LocationSource listener failed")

    # ------------------------------------------------------------------
    # Observable fields
    # ------------------------------------------------------------------

    @property
    def state(self) -> LocationState:
        return self._state

    @property
    def speed(self) -> float:
        """Current speed in meters/second (never negative)."""
        return self._state.speed

    @property
    def horizontal_accuracy(self) -> int | None:
        """Integer horizontal accuracy of the last fix, in meters."""
        return self._state.horizontal_accuracy

    @property
    def signal_bars(self) -> int:
        return self._state.signal_bars

    @property
    def location(self) -> LocationSample | None:
        return self._state.location

    @property
    def coordinate(self) -> Coordinate | None:
        location = self._state.location
        return location.coordinate if location is not None else None

    @property
    def altitude(self) -> float | None:
        location = self._state.location
        return location.altitude if location is not None else None

    @property
    def heading(self) -> HeadingSample | None:
        return self._state.heading

    @property
    def course(self) -> float | None:
        """Course over ground in degrees, or None when unknown."""
        return self._state.course
