# clinic_booking/services/slots/availability.py
"""
Bookable slots for a day range: generated grid minus booked starts.

The result is advisory. A slot listed here may be taken by the time a
reservation is attempted; reservation (the unique constraint) is the
authority.
"""

from datetime import date

from sqlalchemy.orm import Session

from ...utils.timewindow import end_of_day, parse_day, start_of_day
from ..booking_store import BookingStore
from ..errors import InvalidRange
from .config import ClinicHours, get_clinic_hours
from .generator import Slot, generate_slots


def parse_range(
    raw_from: str | None,
    raw_to: str | None,
    hours: ClinicHours | None = None,
    max_days: int | None = None,
) -> tuple[date, date]:
    """
    Parse `from`/`to` query values into calendar days.

    Ranges wider than max_days (settings.max_range_days) are rejected;
    a reversed range is allowed and yields no slots.
    """
    hours = hours or get_clinic_hours()
    if max_days is None:
        from ...config import settings
        max_days = settings.max_range_days

    if not raw_from or not raw_to:
        raise InvalidRange()
    try:
        start_day, end_day = parse_day(raw_from, hours.zone), parse_day(raw_to, hours.zone)
    except (ValueError, OverflowError):
        raise InvalidRange(
            f"Invalid date range: from={raw_from!r}, to={raw_to!r}"
        ) from None

    if (end_day - start_day).days + 1 > max_days:
        raise InvalidRange(f"Date range must not exceed {max_days} days.")
    return start_day, end_day


def list_available(
    db: Session,
    range_start: date,
    range_end: date,
    hours: ClinicHours | None = None,
) -> list[Slot]:
    """
    Generated slots for [range_start, range_end] whose start does not match
    an existing booking's slot_start_time (exact canonical instant).

    Raises:
        InvalidRange: the range touches the edge of the datetime domain.
    """
    hours = hours or get_clinic_hours()

    try:
        slots = generate_slots(range_start, range_end, hours)
        if not slots:
            return []
        window_start = start_of_day(range_start, hours.zone)
        window_end = end_of_day(range_end, hours.zone)
        slot_ids = [slot.slot_id for slot in slots]
        bookings = BookingStore(db).find_in_range(window_start, window_end)
    except OverflowError:
        raise InvalidRange(
            f"Date range out of supported bounds: {range_start}..{range_end}"
        ) from None

    booked = {b.slot_start_time for b in bookings}
    return [slot for slot, slot_id in zip(slots, slot_ids) if slot_id not in booked]
