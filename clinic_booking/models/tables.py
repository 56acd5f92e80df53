# clinic_booking/models/tables.py
"""
Timestamps are stored as canonical UTC text ("2024-01-02T09:00:00.000Z"),
so string equality and ordering match instant equality and ordering.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship

from ..utils.timewindow import to_canonical

Base = declarative_base()
metadata = Base.metadata


def _now() -> str:
    return to_canonical(datetime.now(timezone.utc))


class Users(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    role = Column(Text, nullable=False, default="patient")
    created_at = Column(Text, nullable=False, default=_now)

    bookings = relationship('Bookings', back_populates='user', passive_deletes=True)


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        # The only guard against double booking: enforced by the database at insert time.
        UniqueConstraint('slot_start_time', name='uq_bookings_slot_start_time'),
        Index('ix_bookings_user_id_slot_start_time', 'user_id', 'slot_start_time'),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    # Snapshot of the user's name at booking time, never re-synced.
    user_name = Column(Text, nullable=False)
    slot_start_time = Column(Text, nullable=False)
    slot_end_time = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False, default=_now)
    updated_at = Column(Text, nullable=False, default=_now)

    user = relationship('Users', back_populates='bookings')
