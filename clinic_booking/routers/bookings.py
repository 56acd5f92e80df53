# clinic_booking/routers/bookings.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..middleware.auth import require_admin, require_identity
from ..schemas.bookings import BookingCancelled, BookingCreate, BookingRead
from ..services.booking_store import BookingStore
from ..services.cancellations import cancel
from ..services.errors import InvalidBookingId
from ..services.reservations import reserve
from ..services.security import CallerIdentity

router = APIRouter(tags=["bookings"])


@router.post("/book", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    identity: CallerIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    return reserve(db, identity.id, identity.name, data.slot_id)


@router.get("/my-bookings", response_model=list[BookingRead])
def list_my_bookings(
    identity: CallerIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    return BookingStore(db).find_by_user(identity.id)


@router.get("/all-bookings", response_model=list[BookingRead])
def list_all_bookings(
    _: CallerIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return BookingStore(db).find_all()


@router.delete("/bookings/{booking_id}", response_model=BookingCancelled)
def cancel_booking(
    booking_id: str,
    identity: CallerIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    if not (booking_id.isascii() and booking_id.isdigit()) or int(booking_id) <= 0:
        raise InvalidBookingId()

    cancel(db, identity, int(booking_id))
    return BookingCancelled(message="Booking cancelled.", id=int(booking_id))
