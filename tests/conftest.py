"""
Pytest fixtures for SpeedView tests.

Provides common test fixtures including:
- Test configuration
- Location/heading sample builders
- An in-memory location provider
- gpsd report lines and a fake gpsd server
"""

import json
import os
import socket
import threading

import pytest

from speedview.core.samples import Coordinate, HeadingSample, LocationSample
from speedview.providers.base import LocationProviderBase


@pytest.fixture
def test_config():
    """Test configuration dictionary."""
    return {
        "app": {"name": "SpeedView", "version": "0.1.0", "debug": False},
        "location": {
            "provider": "auto",
            "gpsd": {"host": "127.0.0.1", "port": 2947, "timeout": 1.0, "retry": 0},
            "replay": {"path": None, "interval": 0, "loop": False},
            "android": {"interval": 1000, "distance": 0},
        },
        "display": {"unit": "mps"},
        "map": {"latitude": 35.6762, "longitude": 139.6503, "zoom": 16},
        "logging": {"level": "INFO", "file": "logs/speedview.log"},
    }


def make_sample(
    speed: float = 10.0,
    accuracy: float = 8.0,
    course: float = 90.0,
    latitude: float = 35.6762,
    longitude: float = 139.6503,
    altitude: float = 40.0,
) -> LocationSample:
    """Build a LocationSample with sensible defaults."""
    return LocationSample(
        coordinate=Coordinate(latitude=latitude, longitude=longitude),
        speed=speed,
        horizontal_accuracy=accuracy,
        altitude=altitude,
        course=course,
    )


@pytest.fixture
def sample_factory():
    """Factory for LocationSample objects."""
    return make_sample


class FakeLocationProvider(LocationProviderBase):
    """In-memory provider; tests push samples with emit_*()."""

    def __init__(self, grant: bool = True):
        super().__init__()
        self.grant = grant
        self.permission_requests = 0
        self.starts = 0
        self.stops = 0

    def request_permission(self, on_result):
        self.permission_requests += 1
        on_result(self.grant)

    def _start(self):
        self.starts += 1

    def _stop(self):
        self.stops += 1

    def emit_locations(self, samples):
        self._emit_locations(samples)

    def emit_heading(self, heading: HeadingSample):
        self._emit_heading(heading)


@pytest.fixture
def fake_provider():
    """Provider that grants permission and delivers nothing until told to."""
    return FakeLocationProvider()


@pytest.fixture
def denying_provider():
    """Provider that refuses location permission."""
    return FakeLocationProvider(grant=False)


def tpv_line(**fields) -> str:
    """Build a gpsd TPV report line."""
    payload = {
        "class": "TPV",
        "mode": 3,
        "time": "2024-05-01T12:00:00.000Z",
        "lat": 35.6762,
        "lon": 139.6503,
        "altMSL": 41.2,
        "speed": 12.5,
        "track": 87.0,
        "eph": 4.6,
    }
    payload.update(fields)
    return json.dumps({k: v for k, v in payload.items() if v is not None})


def att_line(**fields) -> str:
    """Build a gpsd ATT report line."""
    payload = {"class": "ATT", "time": "2024-05-01T12:00:00.500Z", "heading": 270.5}
    payload.update(fields)
    return json.dumps({k: v for k, v in payload.items() if v is not None})


@pytest.fixture
def replay_file(tmp_path):
    """A short gpsd capture: two fixes, a heading and some noise."""
    path = tmp_path / "drive.jsonl"
    lines = [
        json.dumps({"class": "VERSION", "release": "3.25"}),
        tpv_line(mode=1, lat=None, lon=None),
        tpv_line(speed=5.0),
        "not json at all",
        json.dumps({"class": "SKY", "satellites": []}),
        att_line(heading=12.0),
        tpv_line(speed=7.5, lat=35.68),
    ]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class FakeGpsd:
    """
    Minimal gpsd stand-in: accepts one client, records the WATCH command,
    sends the given lines, then holds the connection open until closed.
    """

    def __init__(self, lines: list[str], hold_open: bool = True):
        self.lines = lines
        self.hold_open = hold_open
        self.received = b""
        self._done = threading.Event()

        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._server.bind(("127.0.0.1", 0))
        self._server.listen(1)
        self._server.settimeout(5.0)
        self.port = self._server.getsockname()[1]

        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self):
        try:
            conn, _ = self._server.accept()
        except OSError:
            return
        with conn:
            conn.settimeout(5.0)
            try:
                self.received = conn.recv(1024)
                for line in self.lines:
                    conn.sendall(line.encode("utf-8") + b"\n")
            except OSError:
                return
            if self.hold_open:
                self._done.wait(5.0)

    def close(self):
        self._done.set()
        try:
            # Wakes a pending accept()
            self._server.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._server.close()
        self._thread.join(timeout=5.0)


@pytest.fixture
def gpsd_server():
    """Factory for FakeGpsd servers, closed automatically after the test."""
    servers = []

    def _make(lines, hold_open=True):
        server = FakeGpsd(lines, hold_open=hold_open)
        servers.append(server)
        return server

    yield _make

    for server in servers:
        server.close()


@pytest.fixture
def tpv():
    """Builder for gpsd TPV report lines."""
    return tpv_line


@pytest.fixture
def att():
    """Builder for gpsd ATT report lines."""
    return att_line


@pytest.fixture
def clean_env(monkeypatch):
    """Isolated os.environ without SPEEDVIEW_* variables."""
    environ = {k: v for k, v in os.environ.items() if not k.startswith("SPEEDVIEW_")}
    monkeypatch.setattr(os, "environ", environ)
    return environ


@pytest.fixture
def config_dir(tmp_path):
    """Config directory with a default and a development file."""
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "default.yaml").write_text(
        """
app:
  name: SpeedView
  debug: false
location:
  provider: auto
  gpsd:
    host: 127.0.0.1
    port: 2947
display:
  unit: mps
logging:
  level: INFO
""",
        encoding="utf-8",
    )
    (directory / "development.yaml").write_text(
        """
app:
  debug: true
logging:
  level: DEBUG
""",
        encoding="utf-8",
    )
    return directory
