"""Entry point for running the weather widget as a module."""

import argparse
import atexit
import logging
import signal
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .app import WeatherWidgetApp
from .exceptions import ConfigError
from .host import WidgetAttributes
from .models.config import Config

# Global reference for signal handlers
_app: WeatherWidgetApp | None = None
_logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging with rotation support.

    Args:
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR)
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    log_dir = Path("logs")
    try:
        log_dir.mkdir(exist_ok=True)
        # Rotate at 10MB, keep 5 backup files
        file_handler = RotatingFileHandler(
            log_dir / "weather_widget.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        handlers.append(file_handler)
    except (PermissionError, OSError):
        pass  # Skip file logging if we can't write

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def _signal_handler(signum: int, frame: object) -> None:
    """Handle shutdown signals gracefully.

    Args:
        signum: Signal number received
        frame: Current stack frame (unused)
    """
    signal_name = signal.Signals(signum).name
    _logger.info(f"Received {signal_name}, shutting down gracefully...")

    if _app is not None:
        _app.exit()


def _cleanup() -> None:
    """Cleanup handler called on exit."""
    _logger.info("Weather widget shutdown complete")


def setup_signal_handlers() -> None:
    """Set up signal handlers for graceful shutdown."""
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)
    atexit.register(_cleanup)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Weather Widget - current conditions card for a city"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.json"),
        help="Path to configuration file (default: config.json)",
    )
    parser.add_argument("--city", help="City to show instead of the profile location")
    parser.add_argument("--api-key", help="WeatherAPI key (overrides config and environment)")
    parser.add_argument(
        "--no-override",
        action="store_true",
        help="Do not let the user change the city",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    global _app

    args = build_parser().parse_args(argv)

    if args.version:
        from . import __version__

        print(f"Weather Widget v{__version__}")
        sys.exit(0)

    try:
        config = Config.load_or_default(args.config)
    except ConfigError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    log_level = "DEBUG" if args.verbose else config.settings.log_level
    setup_logging(log_level)
    setup_signal_handlers()

    if args.api_key:
        config.weather.api_key = args.api_key
    if not config.weather.api_key:
        _logger.warning("No WeatherAPI key configured; requests will be rejected")

    attributes = WidgetAttributes(city=args.city, allow_city_override=not args.no_override)

    _logger.info("Starting Weather Widget")
    _app = WeatherWidgetApp(config=config, attributes=attributes)
    _app.run()


if __name__ == "__main__":
    main()
