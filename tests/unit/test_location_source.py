"""
Unit tests for LocationSource.
"""

import logging

import pytest

from speedview.core.display import format_speed
from speedview.core.location_source import LocationSource
from speedview.core.samples import HeadingSample, LocationState
from speedview.core.signal import signal_bars
from speedview.core.units import SpeedUnit


@pytest.fixture
def source(fake_provider):
    source = LocationSource(fake_provider)
    source.activate()
    return source


class TestActivation:
    """Tests for permission and subscription lifecycle."""

    def test_activate_requests_permission_and_subscribes(self, fake_provider):
        source = LocationSource(fake_provider)
        assert not source.is_active

        source.activate()

        assert fake_provider.permission_requests == 1
        assert fake_provider.starts == 1
        assert fake_provider.is_running
        assert source.is_active

    def test_activate_twice_is_noop(self, fake_provider):
        source = LocationSource(fake_provider)
        source.activate()
        source.activate()

        assert fake_provider.permission_requests == 1
        assert fake_provider.subscriber_count == 1

    def test_permission_denied(self, denying_provider, caplog):
        source = LocationSource(denying_provider)

        with caplog.at_level(logging.WARNING):
            source.activate()

        assert not source.is_active
        assert not denying_provider.is_running
        assert "permission not granted" in caplog.text
        assert source.state == LocationState()

    def test_deactivate_unsubscribes(self, source, fake_provider):
        source.deactivate()

        assert not source.is_active
        assert fake_provider.stops == 1
        assert not fake_provider.is_running

    def test_state_kept_after_deactivate(self, source, fake_provider, sample_factory):
        fake_provider.emit_locations([sample_factory(speed=4.0)])
        source.deactivate()

        assert source.speed == 4.0


class TestLocationUpdates:
    """Tests for on_location_batch normalization."""

    def test_defaults_before_first_fix(self, source):
        assert source.speed == 0.0
        assert source.horizontal_accuracy is None
        assert source.signal_bars == 0
        assert source.location is None
        assert source.coordinate is None
        assert source.altitude is None
        assert source.heading is None
        assert source.course is None

    def test_invalid_course_scenario(self, source, fake_provider, sample_factory):
        """speed=10, accuracy=8, course=-1 -> 10.0 m/s, 3 bars, course hidden."""
        fake_provider.emit_locations([sample_factory(speed=10.0, accuracy=8.0, course=-1.0)])

        assert format_speed(source.speed, SpeedUnit.MPS) == "10.0"
        assert source.signal_bars == 3
        assert source.course is None

    def test_kmh_display_scenario(self, source, fake_provider, sample_factory):
        fake_provider.emit_locations([sample_factory(speed=10.0)])

        assert format_speed(source.speed, SpeedUnit.KMH) == "36.0"

    @pytest.mark.parametrize("raw_speed", [-1.0, -0.001, -50.0])
    def test_negative_speed_stored_as_zero(self, source, fake_provider, sample_factory, raw_speed):
        fake_provider.emit_locations([sample_factory(speed=raw_speed)])

        assert source.speed == 0.0
        assert source.location.speed == raw_speed

    @pytest.mark.parametrize("raw_course", [-1.0, -0.5, -359.0])
    def test_negative_course_is_absent(self, source, fake_provider, sample_factory, raw_course):
        fake_provider.emit_locations([sample_factory(course=raw_course)])

        assert source.course is None

    @pytest.mark.parametrize("raw_course", [0.0, 0.1, 180.0, 359.9])
    def test_valid_course_is_stored(self, source, fake_provider, sample_factory, raw_course):
        fake_provider.emit_locations([sample_factory(course=raw_course)])

        assert source.course == raw_course

    def test_course_cleared_by_invalid_sample(self, source, fake_provider, sample_factory):
        fake_provider.emit_locations([sample_factory(course=45.0)])
        fake_provider.emit_locations([sample_factory(course=-1.0)])

        assert source.course is None

    def test_accuracy_truncated_to_int(self, source, fake_provider, sample_factory):
        fake_provider.emit_locations([sample_factory(accuracy=5.9)])

        assert source.horizontal_accuracy == 5
        assert source.signal_bars == 4

    @pytest.mark.parametrize("raw_accuracy", [-0.5, -1.0, 12.7])
    def test_bars_match_raw_accuracy(self, source, fake_provider, sample_factory, raw_accuracy):
        fake_provider.emit_locations([sample_factory(accuracy=raw_accuracy)])

        assert source.signal_bars == signal_bars(raw_accuracy)

    @pytest.mark.parametrize("raw_accuracy", [float("inf"), float("nan")])
    def test_non_finite_accuracy_is_invalid(self, source, fake_provider, sample_factory, raw_accuracy):
        fake_provider.emit_locations([sample_factory(speed=float("nan"), accuracy=raw_accuracy)])

        assert source.horizontal_accuracy == -1
        assert source.signal_bars == 0
        assert source.speed == 0.0

    def test_position_fields(self, source, fake_provider, sample_factory):
        sample = sample_factory(latitude=48.8584, longitude=2.2945, altitude=35.0)
        fake_provider.emit_locations([sample])

        assert source.location is sample
        assert source.coordinate.latitude == 48.8584
        assert source.coordinate.longitude == 2.2945
        assert source.altitude == 35.0

    def test_last_sample_in_batch_wins(self, source, fake_provider, sample_factory):
        batch = [
            sample_factory(speed=1.0, accuracy=3.0),
            sample_factory(speed=2.0, accuracy=30.0),
            sample_factory(speed=3.0, accuracy=15.0),
        ]
        fake_provider.emit_locations(batch)

        assert source.speed == 3.0
        assert source.horizontal_accuracy == 15
        assert source.location is batch[-1]

    def test_empty_batch_ignored(self, source, sample_factory):
        notified = []
        source.subscribe(notified.append)

        source.on_location_batch([])

        assert notified == []
        assert source.state == LocationState()

    def test_location_keeps_heading(self, source, fake_provider, sample_factory):
        heading = HeadingSample(true_heading=10.0)
        fake_provider.emit_heading(heading)
        fake_provider.emit_locations([sample_factory()])

        assert source.heading is heading


class TestHeadingUpdates:
    def test_heading_replaced_unconditionally(self, source, fake_provider):
        fake_provider.emit_heading(HeadingSample(true_heading=350.0))
        fake_provider.emit_heading(HeadingSample(true_heading=5.0))

        assert source.heading.true_heading == 5.0

    def test_heading_does_not_touch_location(self, source, fake_provider, sample_factory):
        fake_provider.emit_locations([sample_factory(speed=8.0)])
        fake_provider.emit_heading(HeadingSample(true_heading=5.0))

        assert source.speed == 8.0


class TestChangeNotification:
    """Tests for subscribe/unsubscribe."""

    def test_listener_receives_new_state(self, source, fake_provider, sample_factory):
        received = []
        source.subscribe(received.append)

        fake_provider.emit_locations([sample_factory(speed=12.0)])
        fake_provider.emit_heading(HeadingSample(true_heading=90.0))

        assert len(received) == 2
        assert received[0].speed == 12.0
        assert received[0].heading is None
        assert received[1].heading.true_heading == 90.0
        assert received[1] is source.state

    def test_listeners_called_in_order(self, source, sample_factory):
        calls = []
        source.subscribe(lambda state: calls.append("first"))
        source.subscribe(lambda state: calls.append("second"))

        source.on_location_batch([sample_factory()])

        assert calls == ["first", "second"]

    def test_unsubscribe(self, source, sample_factory):
        received = []
        handle = source.subscribe(received.append)
        source.unsubscribe(handle)

        source.on_location_batch([sample_factory()])

        assert received == []

    def test_unsubscribe_unknown_handle(self, source):
        source.unsubscribe(12345)

    def test_failing_listener_does_not_block_others(self, source, sample_factory, caplog):
        received = []

        def broken(state):
            raise RuntimeError("render failed")

        source.subscribe(broken)
        source.subscribe(received.append)

        with caplog.at_level(logging.ERROR):
            source.on_location_batch([sample_factory(speed=6.0)])

        assert len(received) == 1
        assert source.speed == 6.0
        assert "listener failed" in caplog.text

    def test_states_are_snapshots(self, source, sample_factory):
        received = []
        source.subscribe(received.append)

        source.on_location_batch([sample_factory(speed=1.0)])
        source.on_location_batch([sample_factory(speed=2.0)])

        assert [state.speed for state in received] == [1.0, 2.0]


class TestDispatch:
    """Tests for routing provider callbacks through a dispatcher."""

    def test_updates_wait_for_dispatcher(self, fake_provider, sample_factory):
        pending = []
        source = LocationSource(fake_provider, dispatch=pending.append)

        source.activate()
        assert not source.is_active  # permission result is still queued

        pending.pop(0)()
        assert source.is_active

        fake_provider.emit_locations([sample_factory(speed=3.0)])
        fake_provider.emit_locations([sample_factory(speed=9.0)])
        fake_provider.emit_heading(HeadingSample(true_heading=1.0))
        fake_provider.emit_heading(HeadingSample(true_heading=2.0))
        assert source.speed == 0.0

        while pending:
            pending.pop(0)()

        assert source.speed == 9.0
        assert source.heading.true_heading == 2.0

    def test_deactivate_before_permission_result(self, fake_provider):
        pending = []
        source = LocationSource(fake_provider, dispatch=pending.append)

        source.activate()
        source.deactivate()
        pending.pop(0)()

        assert not source.is_active
        assert not fake_provider.is_running
