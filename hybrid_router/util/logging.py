from __future__ import annotations

import logging
import sys

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# per-request INFO lines from the CoinGecko client
_CHATTY_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str) -> int:
    return _LEVELS.get(level.strip().lower(), logging.INFO)


def setup_logging(level: str = "info") -> None:
    """Send log records to stderr; stdout carries the CLI's JSON output."""

    numeric = resolve_level(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s :: %(message)s"))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(numeric)
    for name in _CHATTY_LOGGERS:
        quiet = logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING
        logging.getLogger(name).setLevel(quiet)
