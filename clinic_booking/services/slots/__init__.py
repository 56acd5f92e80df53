# clinic_booking/services/slots/__init__.py
"""
Slots module.

Grid: generated from the fixed operating-hours template (pure)
Availability: grid minus existing bookings (one range query)
"""

from .config import ClinicHours, get_clinic_hours
from .generator import Slot, generate_slots
from .availability import list_available, parse_range

__all__ = [
    "ClinicHours",
    "get_clinic_hours",
    "Slot",
    "generate_slots",
    "list_available",
    "parse_range",
]
