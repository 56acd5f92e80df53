# clinic_booking/services/slots/config.py
"""
Operating-hours template for the slot grid.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo

from ...utils.timewindow import at


@dataclass(frozen=True)
class ClinicHours:
    """
    Fixed daily template every slot is derived from.

    Attributes:
        open_time: First slot start (wall clock, reference zone)
        close_time: No slot may end after this
        slot_duration_minutes: Grid step and slot length (15/30/60)
        timezone: IANA name of the single reference zone
    """
    open_time: time = time(9, 0)
    close_time: time = time(17, 0)
    slot_duration_minutes: int = 30  # 15 / 30 / 60
    timezone: str = "UTC"

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_duration_minutes not in (15, 30, 60):
            raise ValueError(
                f"slot_duration_minutes must be 15, 30, or 60, got {self.slot_duration_minutes}"
            )
        if self.open_time >= self.close_time:
            raise ValueError(
                f"open_time must be before close_time, got {self.open_time}-{self.close_time}"
            )
        # fail fast on unknown zone names
        ZoneInfo(self.timezone)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def slot_duration(self) -> timedelta:
        return timedelta(minutes=self.slot_duration_minutes)

    @property
    def slots_per_day(self) -> int:
        """
        Number of whole slots between open and close.

        - 09:00-17:00, 30 min → 16
        """
        open_min = self.open_time.hour * 60 + self.open_time.minute
        close_min = self.close_time.hour * 60 + self.close_time.minute
        return (close_min - open_min) // self.slot_duration_minutes

    def day_window(self, day: date) -> tuple[datetime, datetime]:
        """(day_open, day_close) for a calendar day in the reference zone."""
        return at(day, self.open_time, self.zone), at(day, self.close_time, self.zone)

    def is_on_grid(self, instant: datetime) -> bool:
        """True when `instant` is a slot start the generator would emit."""
        local = instant.astimezone(self.zone)
        day_open, day_close = self.day_window(local.date())
        if local < day_open or local + self.slot_duration > day_close:
            return False
        return (local - day_open) % self.slot_duration == timedelta(0)


@lru_cache
def get_clinic_hours() -> ClinicHours:
    """
    Get the clinic's operating-hours template (singleton).

    Built once from settings.
    """
    from ...config import settings

    return ClinicHours(
        open_time=time.fromisoformat(settings.clinic_open),
        close_time=time.fromisoformat(settings.clinic_close),
        slot_duration_minutes=settings.slot_duration_minutes,
        timezone=settings.clinic_timezone,
    )
