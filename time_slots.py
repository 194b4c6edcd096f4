import re
from typing import Iterable, List, Optional, Tuple

import pandas as pd

# "2:00pm", "2:30 PM", "9am"
TIME_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([ap]m)\s*$", re.IGNORECASE)
# "Mon 2:00pm-4:00pm"
RANGE_RE = re.compile(r"^\s*(\S+)\s+([^-]+?)\s*-\s*([^-]+?)\s*$")

SLOT_HOURS = 0.5


class MalformedTimeRange(ValueError):
    """Raised when a schedule entry cannot be read as '<Day> <start>-<end>'."""


def parse_multi_line_text(text: Optional[str]) -> List[str]:
    if text is None or (not isinstance(text, str) and pd.isna(text)):
        return []
    return [item.strip() for item in str(text).split(",") if item.strip()]


def parse_time(text: str) -> float:
    """
    Converts a 12-hour clock string into a fractional hour of the day.
    - '12:00am' -> 0.0, '12:00pm' -> 12.0, '2:30pm' -> 14.5
    - Only whole and half hours are accepted.
    """
    m = TIME_RE.match(str(text))
    if not m:
        raise MalformedTimeRange(f"Unreadable clock time: {text!r}")
    hour = int(m.group(1))
    minute = m.group(2) or "00"
    meridiem = m.group(3).lower()
    if not 1 <= hour <= 12 or minute not in ("00", "30"):
        raise MalformedTimeRange(f"Clock time must be on the hour or half hour: {text!r}")

    hour = hour % 12
    if meridiem == "pm":
        hour += 12
    return hour + (0.5 if minute == "30" else 0.0)


def format_time(value: float) -> str:
    hour = int(value)
    minute = "30" if value - hour >= 0.5 else "00"
    period = "pm" if hour >= 12 else "am"
    display_hour = 12 if hour % 12 == 0 else hour % 12
    return f"{display_hour}:{minute}{period}"


def parse_range(text: str) -> Tuple[str, float, float]:
    m = RANGE_RE.match(str(text))
    if not m:
        raise MalformedTimeRange(f"Expected '<Day> <start>-<end>', got {text!r}")
    day, start_text, end_text = m.groups()
    start = parse_time(start_text)
    end = parse_time(end_text)
    if end <= start:
        raise MalformedTimeRange(f"Range ends before it starts: {text!r}")
    return day, start, end


def expand_availability(ranges: Iterable[str]) -> List[str]:
    """
    Splits every '<Day> <start>-<end>' range into half-hour slot tokens,
    e.g. 'Mon 2:00pm-3:00pm' -> ['Mon 2:00pm-2:30pm', 'Mon 2:30pm-3:00pm'].
    """
    expanded = []
    for entry in ranges:
        day, start, end = parse_range(entry)
        time = start
        while time + SLOT_HOURS <= end:
            expanded.append(f"{day} {format_time(time)}-{format_time(time + SLOT_HOURS)}")
            time += SLOT_HOURS
    return expanded


def expand_session_times(text: Optional[str]) -> List[str]:
    # Mentee slots go through the same expansion so both sides compare as half-hour tokens.
    slots = []
    for slot in expand_availability(parse_multi_line_text(text)):
        if slot not in slots:
            slots.append(slot)
    return slots
