# clinic_booking/routers/slots.py
"""
Slots API endpoints.

GET /slots?from=YYYY-MM-DD&to=YYYY-MM-DD - bookable slots in a day range
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.slots import SlotRead
from ..services.slots import get_clinic_hours, list_available, parse_range
from ..utils.timewindow import to_canonical

router = APIRouter(tags=["slots"])


@router.get("/slots", response_model=list[SlotRead])
def get_available_slots(
    range_from: str | None = Query(None, alias="from"),
    range_to: str | None = Query(None, alias="to"),
    db: Session = Depends(get_db),
):
    """Slots of the operating-hours grid not yet booked (best effort)."""
    hours = get_clinic_hours()
    start_day, end_day = parse_range(range_from, range_to, hours)

    return [
        SlotRead(
            slot_id=slot.slot_id,
            start=to_canonical(slot.start),
            end=to_canonical(slot.end),
        )
        for slot in list_available(db, start_day, end_day, hours)
    ]
