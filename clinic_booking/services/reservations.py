# clinic_booking/services/reservations.py
"""
Reservation of a single slot.

First writer for a start instant wins; later callers get SlotTaken and
must pick another slot. Conflicts are never retried here.
"""

import logging

from sqlalchemy.orm import Session

from ..models import Bookings as DBBookings
from ..utils.timewindow import parse_instant, to_canonical, truncate_to_millis
from .booking_store import BookingStore
from .errors import InvalidRequest, SlotOutsideGrid, SlotTaken
from .slots.config import ClinicHours, get_clinic_hours

logger = logging.getLogger(__name__)


def reserve(
    db: Session,
    caller_id: int,
    caller_name: str,
    slot_start_time: str | None,
    hours: ClinicHours | None = None,
    strict_grid: bool | None = None,
) -> DBBookings:
    """
    Book the slot starting at `slot_start_time` for the caller.

    By default any parseable instant is accepted (no grid check);
    strict_grid (or settings.strict_slot_grid) rejects starts the
    generator would not emit.

    Raises:
        InvalidRequest: missing or unparseable start time.
        SlotOutsideGrid: strict mode and start is off-grid.
        SlotTaken: another booking already holds this start.
    """
    if strict_grid is None:
        from ..config import settings
        strict_grid = settings.strict_slot_grid
    hours = hours or get_clinic_hours()

    if not slot_start_time or not slot_start_time.strip():
        raise InvalidRequest("`slotId` is required.")
    try:
        start = truncate_to_millis(parse_instant(slot_start_time))
        end = start + hours.slot_duration
        on_grid = hours.is_on_grid(start)
    except (ValueError, OverflowError):
        # OverflowError: the slot would end past datetime.max
        raise InvalidRequest(f"Invalid slotId: {slot_start_time!r}") from None

    if strict_grid and not on_grid:
        raise SlotOutsideGrid()

    candidate = DBBookings(
        user_id=caller_id,
        user_name=caller_name,
        slot_start_time=to_canonical(start),
        slot_end_time=to_canonical(end),
    )

    try:
        booking = BookingStore(db).create_if_absent(candidate)
    except SlotTaken:
        logger.warning(f"Slot {candidate.slot_start_time} already taken, user_id={caller_id}")
        raise

    logger.info(f"Booking {booking.id} created: {booking.slot_start_time} for user_id={caller_id}")
    return booking
