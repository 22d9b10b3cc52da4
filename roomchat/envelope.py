from __future__ import annotations

from datetime import datetime
from typing import Optional

from .constants import TIME_FORMAT
from .schemas import ChatMessage


def format_time(now: Optional[datetime] = None, time_format: str = TIME_FORMAT) -> str:
    return (now or datetime.now()).strftime(time_format)


def build_message(
    name: str,
    text: str,
    *,
    now: Optional[datetime] = None,
    time_format: str = TIME_FORMAT,
) -> ChatMessage:
    """Stamp *text* from *name* with the wall-clock time it was sent."""
    return ChatMessage(name=name, text=text, time=format_time(now, time_format))


__all__ = ["build_message", "format_time"]
