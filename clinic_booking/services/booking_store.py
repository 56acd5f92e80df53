# clinic_booking/services/booking_store.py
"""
Booking persistence.

The bookings table carries UNIQUE(slot_start_time). create_if_absent is a
plain INSERT: the constraint decides which of two racing writers wins,
there is no read-before-write.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Bookings as DBBookings
from ..utils.timewindow import to_canonical
from .errors import NotFound, SlotTaken, StoreUnavailable

logger = logging.getLogger(__name__)

SLOT_UNIQUE_COLUMN = "slot_start_time"


def _is_slot_conflict(exc: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed: bookings.slot_start_time"
    # PostgreSQL: '... violates unique constraint "uq_bookings_slot_start_time"'
    return SLOT_UNIQUE_COLUMN in str(exc.orig)


class BookingStore:
    """Booking table access bound to one session (one request)."""

    def __init__(self, db: Session):
        self.db = db

    # ── Read ─────────────────────────────────────────────────────────────

    def find_in_range(self, start: datetime, end: datetime) -> list[DBBookings]:
        """Bookings with slot_start_time in [start, end]."""
        try:
            return (
                self.db.query(DBBookings)
                .filter(
                    DBBookings.slot_start_time >= to_canonical(start),
                    DBBookings.slot_start_time <= to_canonical(end),
                )
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Range query failed: {e}")
            raise StoreUnavailable() from e

    def find_by_user(self, user_id: int) -> list[DBBookings]:
        try:
            return (
                self.db.query(DBBookings)
                .filter(DBBookings.user_id == user_id)
                .order_by(DBBookings.slot_start_time.asc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Bookings query for user {user_id} failed: {e}")
            raise StoreUnavailable() from e

    def find_all(self) -> list[DBBookings]:
        try:
            return (
                self.db.query(DBBookings)
                .order_by(DBBookings.slot_start_time.asc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Bookings query failed: {e}")
            raise StoreUnavailable() from e

    def find_by_id(self, booking_id: int) -> DBBookings | None:
        try:
            return self.db.get(DBBookings, booking_id)
        except SQLAlchemyError as e:
            logger.error(f"Booking lookup {booking_id} failed: {e}")
            raise StoreUnavailable() from e

    # ── Write ────────────────────────────────────────────────────────────

    def create_if_absent(self, candidate: DBBookings) -> DBBookings:
        """
        Persist `candidate` unless its slot_start_time is already taken.

        Raises:
            SlotTaken: the unique constraint rejected the insert;
                       the session is rolled back, nothing is written.
            StoreUnavailable: any other database failure.
        """
        self.db.add(candidate)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_slot_conflict(e):
                raise SlotTaken() from e
            logger.error(f"Booking insert rejected: {e}")
            raise StoreUnavailable() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Booking insert failed: {e}")
            raise StoreUnavailable() from e

        self.db.refresh(candidate)
        return candidate

    def delete_by_id(self, booking_id: int) -> None:
        """
        Delete one booking.

        Raises:
            NotFound: no row with this id (e.g. already cancelled).
        """
        try:
            deleted = (
                self.db.query(DBBookings)
                .filter(DBBookings.id == booking_id)
                .delete()
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Booking delete {booking_id} failed: {e}")
            raise StoreUnavailable() from e

        if not deleted:
            raise NotFound()
