from __future__ import annotations

import logging
from typing import Optional

from .config import Settings

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    if value is None:
        return default
    text = str(value).strip().upper()
    if text in _LEVELS:
        return _LEVELS[text]
    try:
        return int(text)
    except ValueError:
        return default


def configure_logging(settings: Settings, *, override_level: Optional[str] = None) -> None:
    """Send ``roomchat`` logs to the console.

    Safe to call more than once; the handler installed by a previous call is
    replaced rather than duplicated.
    """
    level = parse_level(override_level or settings.log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(settings.log_format))
    handler.set_name("roomchat")

    log = logging.getLogger("roomchat")
    for h in list(log.handlers):
        if h.get_name() == "roomchat":
            log.removeHandler(h)
    log.addHandler(handler)
    log.setLevel(level)
    log.propagate = False


__all__ = ["configure_logging", "parse_level"]
