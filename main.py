#!/usr/bin/env python3
"""Entry point for the validator health monitor.

Runs a single health check against a validator node and exits with a
status code suitable for cron or another external scheduler:
0 when healthy, 1 on any failure, 130 when interrupted.
"""

import argparse
import asyncio
import importlib.util
import logging
import os
import signal
import sys
from pathlib import Path

from src.validator_health import __version__
from src.validator_health.errors import DependencyMissingError

LOG_FORMAT: str = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

EXIT_FAILURE: int = 1
EXIT_INTERRUPTED: int = 130

# Third-party modules the monitor cannot run without
REQUIRED_MODULES: tuple[str, ...] = ("httpx",)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the application.

    Records go to stdout and, when a path is given, are appended to the
    log file (created along with its parent directories if missing).

    Args:
        level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of the log file
    """
    log_level: int = getattr(logging, level.upper(), logging.INFO)
    logging.addLevelName(logging.WARNING, "WARN")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, mode="a", encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True
    )


# Get logger for this module
logger = logging.getLogger(__name__)


def check_dependencies() -> None:
    """Fail before any network activity if a required library is missing.

    Raises:
        DependencyMissingError: If a required module cannot be imported
    """
    for module in REQUIRED_MODULES:
        if importlib.util.find_spec(module) is None:
            raise DependencyMissingError(f"Required dependency '{module}' not found")


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Validator Health Monitor - check finalization lag and ping the monitoring service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Environment Variables:
  RPC_URL          - Node JSON-RPC endpoint (default: http://127.0.0.1:9944)
  MAX_ALLOWED_GAP  - Largest healthy latest/finalized lag in blocks (default: 25)
  NODE_ID          - Node identifier for reports (default: midnight-validator-1)
  TIMEOUT          - Timeout in seconds for each request, decimals allowed (default: 10)
  LOG_FILE         - Log file path (default: healthchecks.log next to main.py)
  LOG_LEVEL        - Logging level (can be overridden with --log-level)

Exit codes: 0 healthy, 1 unhealthy or error, 130 interrupted.
        """
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Append logs to this file instead of LOG_FILE"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    """Main entry point for the validator health monitor.

    Parses arguments, loads configuration from the environment and runs
    one monitoring cycle.

    Returns:
        Process exit code
    """
    args: argparse.Namespace = build_parser().parse_args(argv)

    # Console only until the log file location is known
    setup_logging(args.log_level)

    try:
        check_dependencies()
    except DependencyMissingError as e:
        logger.error(str(e))
        return EXIT_FAILURE

    # Imported after the dependency check, these pull in httpx
    from src.validator_health.config import MonitorConfig
    from src.validator_health.health_monitor import HealthMonitor

    try:
        config: MonitorConfig = MonitorConfig.from_env()
        if args.log_file:
            config = config.with_log_file(args.log_file)
    except ValueError as e:
        logger.error(f"Configuration Error: {e}")
        logger.error("Please check your environment variables:")
        logger.error("  - RPC_URL: Node JSON-RPC endpoint")
        logger.error("  - MAX_ALLOWED_GAP: Non-negative integer")
        logger.error("  - NODE_ID: Non-empty node identifier")
        logger.error("  - TIMEOUT: Positive number of seconds, e.g. 10 or 2.5")
        logger.error("  - LOG_FILE: Writable log file path")
        return EXIT_FAILURE

    try:
        setup_logging(args.log_level, config.log_file)
    except OSError as e:
        logger.error(f"Cannot open log file {config.log_file}: {e}")
        return EXIT_FAILURE

    config.log_config()

    try:
        monitor: HealthMonitor = HealthMonitor(config)
        return await monitor.run()
    except Exception as e:
        logger.error(f"Fatal Error: {e}", exc_info=True)
        return EXIT_FAILURE


def _raise_interrupt(signum: int, frame: object) -> None:
    raise KeyboardInterrupt


def run() -> None:
    """Run the monitor and exit with its status code."""
    signal.signal(signal.SIGTERM, _raise_interrupt)

    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Script interrupted")
        exit_code = EXIT_INTERRUPTED

    sys.exit(exit_code)


if __name__ == "__main__":
    run()
