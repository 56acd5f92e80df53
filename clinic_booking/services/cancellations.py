# clinic_booking/services/cancellations.py

import logging

from sqlalchemy.orm import Session

from .booking_store import BookingStore
from .errors import Forbidden, NotFound
from .security import CallerIdentity

logger = logging.getLogger(__name__)


def cancel(db: Session, caller: CallerIdentity, booking_id: int) -> None:
    """
    Delete a booking owned by the caller, or any booking for an admin.

    Not idempotent: a second cancel of the same id raises NotFound.
    """
    store = BookingStore(db)

    booking = store.find_by_id(booking_id)
    if booking is None:
        raise NotFound()

    if booking.user_id != caller.id and not caller.is_admin:
        logger.warning(f"Cancel of booking {booking_id} denied for user_id={caller.id}")
        raise Forbidden("You can only cancel your own bookings.")

    store.delete_by_id(booking_id)
    logger.info(f"Booking {booking_id} cancelled by user_id={caller.id} ({caller.role})")
