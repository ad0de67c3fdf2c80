"""
Replay positioning provider.

Plays back a file of gpsd JSON reports, for example one captured with
`gpspipe -w > drive.jsonl`. Useful for demos and for running the UI on a
machine without a GPS receiver.
"""

import logging
import threading
from pathlib import Path

from ..core.gpsd import parse_report
from .base import LocationProviderBase, PermissionCallback

logger = logging.getLogger(__name__)


class ReplayLocationProvider(LocationProviderBase):
    """Emits reports from a gpsd JSON-lines file at a fixed interval."""

    def __init__(self, config: dict):
        """
        Initialize the replay provider.

        Args:
            config: Replay configuration dict with keys:
                - path: File with one gpsd JSON report per line
                - interval: Seconds to wait after each emitted report
                - loop: Restart from the beginning at end of file. A pass
                  that emits nothing ends the replay.
        """
        super().__init__()
        path = config.get("path")
        self.path = Path(path) if path else None
        self.interval = float(config.get("interval", 1.0))
        self.loop = bool(config.get("loop", False))

        self._stop_event = threading.Event()
        self._worker_thread: threading.Thread | None = None

        self.reports_emitted = 0

    def request_permission(self, on_result: PermissionCallback) -> None:
        """Grant access only if there is a file to replay."""
        available = self.path is not None and self.path.is_file()
        if not available:
            logger.error(f"Replay file not found: {self.path}")
        on_result(available)

    def _start(self) -> None:
        self._stop_event.clear()
        self._worker_thread = threading.Thread(
            target=self._worker_loop,
            name="ReplayReader",
            daemon=True,
        )
        self._worker_thread.start()

    def _stop(self) -> None:
        self._stop_event.set()
        if self._worker_thread is not None:
            self._worker_thread.join(timeout=2.0)
            self._worker_thread = None
        logger.info(f"ReplayLocationProvider stopped: reports={self.reports_emitted}")

    def _worker_loop(self) -> None:
        logger.info(f"Replaying {self.path} (interval={self.interval}s, loop={self.loop})")

        while not self._stop_event.is_set():
            try:
                emitted = self._replay_once()
            except OSError as e:
                logger.error(f"Failed to read replay file {self.path}: {e}")
                break
            if not self.loop:
                break
            if emitted == 0 and not self._stop_event.is_set():
                logger.warning(f"No usable reports in {self.path}; stopping replay")
                break

        logger.debug("ReplayReader loop exited")

    def _replay_once(self) -> int:
        """Play the file once. Returns the number of reports emitted."""
        emitted = 0
        # Bytes, like the gpsd socket; parse_report replaces undecodable input
        with open(self.path, "rb") as f:
            for line in f:
                if self._stop_event.is_set():
                    break
                report = parse_report(line)
                if report is None:
                    continue
                self._emit_report(report)
                self.reports_emitted += 1
                emitted += 1
                if self._stop_event.wait(self.interval):
                    break
        return emitted
