# clinic_booking/schemas/bookings.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookingCreate(BaseModel):
    # Validated by the reservation service so that a missing slotId
    # gets the same BAD_REQUEST outcome as an unparseable one.
    slot_id: Optional[str] = Field(None, alias="slotId")

    model_config = ConfigDict(populate_by_name=True)


class BookingRead(BaseModel):
    id: int
    user_id: int
    user_name: str
    slot_start_time: str
    slot_end_time: str
    created_at: str

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BookingCancelled(BaseModel):
    message: str
    id: int
