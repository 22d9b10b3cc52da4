import re
from datetime import datetime

from roomchat.envelope import build_message, format_time


def test_build_message_stamps_given_time() -> None:
    msg = build_message("Alice", "hi", now=datetime(2024, 5, 1, 9, 5, 7))
    assert msg.model_dump() == {"name": "Alice", "text": "hi", "time": "09:05:07"}


def test_build_message_defaults_to_current_time() -> None:
    msg = build_message("Alice", "hi")
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", msg.time)


def test_format_time_honours_custom_format() -> None:
    assert format_time(datetime(2024, 5, 1, 21, 0, 0), "%I:%M %p") == "09:00 PM"


def test_build_message_keeps_empty_text() -> None:
    assert build_message("", "").text == ""
