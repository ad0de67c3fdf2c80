"""
gpsd positioning provider.

Connects to a gpsd daemon over TCP, enables JSON watch mode and forwards TPV
(position/velocity) and ATT (heading) reports to subscribers. Works on any
desktop or single-board computer running gpsd.
"""

import logging
import socket
import threading

from ..core.gpsd import WATCH_COMMAND, parse_report
from .base import LocationProviderBase

logger = logging.getLogger(__name__)


class GpsdLocationProvider(LocationProviderBase):
    """
    Background reader for the gpsd JSON stream.

    A daemon thread owns the socket; reports are delivered to subscriber
    callbacks from that thread.
    """

    def __init__(self, config: dict):
        """
        Initialize the gpsd provider.

        Args:
            config: gpsd configuration dict with keys:
                - host: gpsd host name or address
                - port: gpsd TCP port
                - timeout: Connect timeout in seconds
                - retry: Reconnect delay in seconds (0 disables reconnecting)
        """
        super().__init__()
        self.host = config.get("host", "127.0.0.1")
        self.port = int(config.get("port", 2947))
        self.timeout = float(config.get("timeout", 3.0))
        self.retry = float(config.get("retry", 2.0))

        self._stop_event = threading.Event()
        self._worker_thread: threading.Thread | None = None
        self._sock: socket.socket | None = None

        # Statistics
        self.reports_received = 0
        self.connections = 0

    def _start(self) -> None:
        self._stop_event.clear()
        self._worker_thread = threading.Thread(
            target=self._worker_loop,
            name="GpsdReader",
            daemon=True,
        )
        self._worker_thread.start()

    def _stop(self) -> None:
        self._stop_event.set()

        # Unblock a pending read
        sock = self._sock
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass

        if self._worker_thread is not None:
            self._worker_thread.join(timeout=2.0)
            self._worker_thread = None

        logger.info(
            f"GpsdLocationProvider stopped: "
            f"connections={self.connections}, "
            f"reports={self.reports_received}"
        )

    def _worker_loop(self) -> None:
        """Connect, read until the stream ends, reconnect while running."""
        logger.debug("GpsdReader loop started")

        while not self._stop_event.is_set():
            try:
                self._read_stream()
                if not self._stop_event.is_set():
                    logger.warning(f"gpsd at {self.host}:{self.port} closed the connection")
            except OSError as e:
                if self._stop_event.is_set():
                    break
                logger.error(f"gpsd connection to {self.host}:{self.port} failed: {e}")

            if self.retry <= 0:
                logger.info("gpsd reconnect disabled; location updates have ended")
                break
            if self._stop_event.wait(self.retry):
                break

        logger.debug("GpsdReader loop exited")

    def _read_stream(self) -> None:
        with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
            self._sock = sock
            try:
                if self._stop_event.is_set():
                    return

                # Reads block until data arrives or _stop() shuts the socket down
                sock.settimeout(None)
                sock.sendall(WATCH_COMMAND)
                self.connections += 1
                logger.info(f"Connected to gpsd at {self.host}:{self.port}")

                with sock.makefile("rb") as stream:
                    for line in stream:
                        if self._stop_event.is_set():
                            break
                        report = parse_report(line)
                        if report is None:
                            continue
                        self.reports_received += 1
                        self._emit_report(report)
            finally:
                self._sock = None
