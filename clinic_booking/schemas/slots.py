# clinic_booking/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from pydantic import BaseModel, ConfigDict, Field


class SlotRead(BaseModel):
    """A bookable slot; slot_id is the canonical start instant."""
    slot_id: str = Field(alias="slotId")
    start: str
    end: str

    model_config = ConfigDict(populate_by_name=True)
