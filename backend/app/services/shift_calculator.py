"""
shift_calculator.py — Elapsed hours for one clocked shift.

Shift times arrive from the time-tracking store either as ``datetime.time``
objects (asyncpg TIME columns) or as ``"HH:MM"`` / ``"HH:MM:SS"`` strings.
Both are reduced to minute precision before differencing.
"""

from datetime import datetime, time
from typing import Union

MINUTES_PER_DAY: int = 24 * 60

TimeLike = Union[time, datetime, str]


def _to_minutes(value: TimeLike) -> int:
    """Minutes since midnight; seconds are dropped."""
    if isinstance(value, datetime):
        value = value.time()
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    text = str(value).strip()
    fmt = "%H:%M:%S" if text.count(":") == 2 else "%H:%M"
    parsed = datetime.strptime(text, fmt)
    return parsed.hour * 60 + parsed.minute


def duration_hours(start_time: TimeLike, finish_time: TimeLike) -> float:
    """
    Hours between ``start_time`` and ``finish_time``.

    A finish earlier than the start is read as the next day (overnight shift),
    so 22:00 → 02:00 is 4.0 hours. There is no upper bound: any earlier finish
    yields a shift shorter than 24 hours. Equal times yield 0.0.
    """
    start_min = _to_minutes(start_time)
    finish_min = _to_minutes(finish_time)

    if finish_min < start_min:
        finish_min += MINUTES_PER_DAY

    return (finish_min - start_min) / 60
