#!/usr/bin/env python3
"""
Location Probe Tool for SpeedView.

Prints live speed, signal bars and position from a location provider without
starting the UI. Handy for checking a gpsd setup or a replay capture.

Usage:
    python scripts/probe_location.py
    python scripts/probe_location.py --replay samples/drive.jsonl --unit kmh
    python scripts/probe_location.py --gpsd-host pi.local --duration 30
"""

import argparse
import queue
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from speedview.core.config import Config
from speedview.core.display import info_lines
from speedview.core.location_source import LocationSource
from speedview.core.samples import LocationState
from speedview.core.signal import MAX_SIGNAL_BARS
from speedview.core.units import SpeedUnit
from speedview.providers import get_location_provider


def main():
    parser = argparse.ArgumentParser(description="SpeedView Location Probe")
    parser.add_argument("--gpsd-host", type=str, help="gpsd host")
    parser.add_argument("--gpsd-port", type=int, help="gpsd port")
    parser.add_argument("--replay", type=str, help="Replay a gpsd JSON capture file")
    parser.add_argument("--unit", type=str, default="mps", help="Speed unit (mps, kmh, mph)")
    parser.add_argument("--duration", type=float, default=0, help="Stop after N seconds (0 = run until Ctrl+C)")
    parser.add_argument("--config", type=str, help="Path to config directory")

    args = parser.parse_args()

    config_dir = Path(args.config) if args.config else None
    config = Config(config_dir)

    location_config = config["location"].copy()
    if args.replay:
        location_config["provider"] = "replay"
        location_config["replay"] = {**location_config.get("replay", {}), "path": args.replay}
    elif args.gpsd_host or args.gpsd_port:
        gpsd_config = dict(location_config.get("gpsd", {}))
        if args.gpsd_host:
            gpsd_config["host"] = args.gpsd_host
        if args.gpsd_port:
            gpsd_config["port"] = args.gpsd_port
        location_config["provider"] = "gpsd"
        location_config["gpsd"] = gpsd_config

    try:
        unit = SpeedUnit.parse(args.unit)
        provider = get_location_provider(location_config)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Provider callbacks are queued and applied on this thread
    pending: queue.Queue = queue.Queue()
    source = LocationSource(provider, dispatch=pending.put)

    def show(state: LocationState) -> None:
        bars = "▮" * state.signal_bars + "▯" * (MAX_SIGNAL_BARS - state.signal_bars)
        print(f"[{bars}] " + " | ".join(info_lines(state, unit)))

    source.subscribe(show)

    print("=== SpeedView Location Probe ===")
    print(f"Provider: {type(provider).__name__}")
    print("Press Ctrl+C to stop\n")

    source.activate()
    deadline = time.monotonic() + args.duration if args.duration > 0 else None

    try:
        while deadline is None or time.monotonic() < deadline:
            try:
                callback = pending.get(timeout=0.2)
            except queue.Empty:
                continue
            callback()
    except KeyboardInterrupt:
        print("\nInterrupted")
    finally:
        source.deactivate()

    state = source.state
    print(f"\nLast fix: {'yes' if state.has_fix else 'none'}")


if __name__ == "__main__":
    main()
