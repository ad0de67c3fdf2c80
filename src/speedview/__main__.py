"""
SpeedView CLI entry point.

Usage:
    python -m speedview                          # Auto-select provider
    python -m speedview --gpsd-host pi.local     # Remote gpsd
    python -m speedview --replay drive.jsonl     # Replay a capture
    python -m speedview --help                   # Show help
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .core.config import ENV_PREFIX, Config
from .core.units import SpeedUnit
from .providers import PROVIDERS


def setup_logging(config: Config) -> None:
    """Configure logging based on config."""
    log_config = config["logging"]
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)

    log_file = log_config.get("file", "logs/speedview.log")
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format=log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file),
        ],
    )


def apply_overrides(args: argparse.Namespace) -> dict[str, str]:
    """
    Translate command-line options into SPEEDVIEW_* environment overrides.

    Returns:
        The variables that were set.
    """
    overrides: dict[str, str] = {}

    if args.replay:
        overrides["LOCATION_PROVIDER"] = "replay"
        overrides["LOCATION_REPLAY_PATH"] = str(Path(args.replay).expanduser())
    if args.provider:
        overrides["LOCATION_PROVIDER"] = args.provider
    if args.gpsd_host:
        overrides["LOCATION_GPSD_HOST"] = args.gpsd_host
    if args.gpsd_port is not None:
        overrides["LOCATION_GPSD_PORT"] = str(args.gpsd_port)
    if args.unit:
        overrides["DISPLAY_UNIT"] = SpeedUnit.parse(args.unit).name.lower()
    if args.debug:
        overrides["ENV"] = "development"

    for key, value in overrides.items():
        os.environ[f"{ENV_PREFIX}{key}"] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="speedview",
        description="SpeedView - GPS Speedometer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m speedview                         Auto-select location provider
    python -m speedview --gpsd-host pi.local    Read from a remote gpsd
    python -m speedview --replay drive.jsonl    Replay `gpspipe -w` output
    python -m speedview --unit kmh              Start with km/h selected
        """,
    )
    parser.add_argument(
        "--provider", choices=["auto", *PROVIDERS], help="Location provider (overrides config)"
    )
    parser.add_argument("--gpsd-host", type=str, help="gpsd host (overrides config)")
    parser.add_argument("--gpsd-port", type=int, help="gpsd port (overrides config)")
    parser.add_argument("--replay", type=str, help="Replay a gpsd JSON capture file")
    parser.add_argument(
        "--unit", choices=[unit.name.lower() for unit in SpeedUnit], help="Initial speed unit"
    )
    parser.add_argument("--config", type=str, help="Path to configuration directory")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    return parser


def main() -> None:
    """Main entry point."""
    args = build_parser().parse_args()

    apply_overrides(args)

    config_dir = Path(args.config) if args.config else None
    config = Config(config_dir)

    setup_logging(config)

    logger = logging.getLogger(__name__)
    logger.info("SpeedView starting...")
    logger.info(f"Environment: {config.env}")
    logger.info(f"Location provider: {config.get('location.provider', 'auto')}")

    # Kivy is only imported once logging and config are in place
    from .mobile.app import run_mobile_app

    run_mobile_app(config)


if __name__ == "__main__":
    main()
