# clinic_booking/models/__init__.py

from .tables import Base, Bookings, Users, metadata

__all__ = ["Base", "Bookings", "Users", "metadata"]
