# clinic_booking/utils/timewindow.py
"""
Time helpers for the slot grid.

All instants leaving this module are timezone-aware. Naive inputs are read as
UTC. The canonical text form is UTC with millisecond precision:

    2024-01-02T09:00:00.000Z
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterator


def to_canonical(dt: datetime) -> str:
    """Format an instant as canonical UTC text (slot id / stored form)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond // 1000:03d}Z"


def truncate_to_millis(dt: datetime) -> datetime:
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


def parse_instant(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp or date into an aware UTC datetime.

    Raises:
        ValueError: empty or unparseable value.
    """
    if value is None:
        raise ValueError("Empty timestamp")
    raw = value.strip()
    if not raw:
        raise ValueError("Empty timestamp")
    if raw[-1] in ("Z", "z"):
        raw = raw[:-1] + "+00:00"

    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_day(value: str, zone: tzinfo) -> date:
    """
    Parse a calendar day ("YYYY-MM-DD"); a full timestamp is accepted
    and mapped to its day in `zone`.
    """
    if value is None or not value.strip():
        raise ValueError("Empty date")
    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return parse_instant(raw).astimezone(zone).date()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Calendar days in [start, end]. Nothing when end < start."""
    if end < start:
        return
    current = start
    while True:
        yield current
        if current == end:
            return
        current += timedelta(days=1)


def at(day: date, clock: time, zone: tzinfo) -> datetime:
    """Wall-clock time on `day` in `zone`, as an aware datetime."""
    return datetime.combine(day, clock, tzinfo=zone)


def start_of_day(day: date, zone: tzinfo) -> datetime:
    return at(day, time.min, zone)


def end_of_day(day: date, zone: tzinfo) -> datetime:
    """Last representable millisecond of `day` in `zone`."""
    return start_of_day(day + timedelta(days=1), zone) - timedelta(milliseconds=1)
