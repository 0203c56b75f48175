#!/usr/bin/env python3
"""Entry point: run the status gateway dispatch API (POST /monitoring/{operation})."""

import argparse
import logging
import os
import sys

# Project root: always resolve relative to script location, not cwd
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)

# ANSI color codes
_RESET = "\033[0m"
_BOLD = "\033[1m"
_GRAY = "\033[90m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_CYAN = "\033[36m"

_LEVEL_COLORS = {
    logging.DEBUG: _GRAY,
    logging.INFO: _CYAN,
    logging.WARNING: _YELLOW,
    logging.ERROR: _RED + _BOLD,
    logging.CRITICAL: _RED + _BOLD,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors per log level."""

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno, _RESET)
        record.levelname = f"{color}[{record.levelname}]{_RESET}"
        return super().format(record)


def setup_logging(debug: bool = False) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ColoredFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logging.root.handlers.clear()
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG if debug else logging.INFO)
    # One INFO line per outbound request otherwise
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the status gateway dispatch API")
    parser.add_argument("config", nargs="?", default=None, help="Path to config.yaml (default: config/config.yaml)")
    parser.add_argument("--status-url", default=None, help="Override status.url from config")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(debug=args.debug)

    from status_gateway.config.settings import read_config
    from status_gateway.server.app import run_server

    config_path = args.config
    if config_path and not os.path.isabs(config_path):
        config_path = os.path.join(_PROJECT_ROOT, config_path)
    try:
        config, resolved = read_config(config_path)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    logging.getLogger(__name__).info("Config: %s", resolved)
    run_server(config, status_url=args.status_url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
