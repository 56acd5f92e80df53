"""Tests for the cancellation service."""

import pytest

from clinic_booking.services.booking_store import BookingStore
from clinic_booking.services.cancellations import cancel
from clinic_booking.services.errors import Forbidden, NotFound
from clinic_booking.services.users import identity_of


@pytest.fixture
def booking(make_user, make_booking):
    owner = make_user("Owner")
    return owner, make_booking(owner, "2024-01-02T09:00:00.000Z", "2024-01-02T09:30:00.000Z")


def test_owner_can_cancel(db, booking):
    owner, record = booking
    cancel(db, identity_of(owner), record.id)
    assert BookingStore(db).find_by_id(record.id) is None


def test_admin_can_cancel_any(db, make_user, booking):
    _, record = booking
    admin = make_user("Admin", role="admin")
    cancel(db, identity_of(admin), record.id)
    assert BookingStore(db).find_by_id(record.id) is None


def test_other_patient_is_forbidden_and_booking_intact(db, make_user, booking):
    _, record = booking
    stranger = make_user("Stranger")

    with pytest.raises(Forbidden):
        cancel(db, identity_of(stranger), record.id)
    assert BookingStore(db).find_by_id(record.id) is not None


def test_missing_booking(db, make_user):
    with pytest.raises(NotFound):
        cancel(db, identity_of(make_user()), 999)


def test_second_cancel_is_not_found(db, booking):
    owner, record = booking
    cancel(db, identity_of(owner), record.id)
    with pytest.raises(NotFound):
        cancel(db, identity_of(owner), record.id)
