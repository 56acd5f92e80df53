# clinic_booking/services/slots/generator.py
"""
Slot grid generation.

Produces the full theoretical slot sequence for a closed day range.
Contains no bookings: exclusion happens in availability.
"""

from dataclasses import dataclass
from datetime import date, datetime

from ...utils.timewindow import iter_days, to_canonical
from .config import ClinicHours, get_clinic_hours


@dataclass(frozen=True)
class Slot:
    start: datetime
    end: datetime

    @property
    def slot_id(self) -> str:
        """Canonical start instant; the slot's identity."""
        return to_canonical(self.start)


def generate_slots(
    range_start: date,
    range_end: date,
    hours: ClinicHours | None = None,
) -> list[Slot]:
    """
    Generate slots for every day in [range_start, range_end].

    Chronological, day-major. The last slot of a day is the latest start
    with start + duration <= day_close. range_end < range_start → [].
    """
    hours = hours or get_clinic_hours()
    step = hours.slot_duration

    slots: list[Slot] = []
    for day in iter_days(range_start, range_end):
        day_open, day_close = hours.day_window(day)
        start = day_open
        while start + step <= day_close:
            slots.append(Slot(start=start, end=start + step))
            start += step

    return slots
