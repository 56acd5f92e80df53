"""Tests for availability: grid minus booked starts."""

from datetime import date

import pytest

from clinic_booking.services.cancellations import cancel
from clinic_booking.services.errors import InvalidRange
from clinic_booking.services.reservations import reserve
from clinic_booking.services.slots import ClinicHours, list_available, parse_range
from clinic_booking.services.users import identity_of

HOURS = ClinicHours()
DAY = date(2024, 1, 2)


def _ids(slots):
    return [s.slot_id for s in slots]


def test_no_bookings_full_grid(db):
    slots = list_available(db, DAY, DAY, HOURS)
    assert len(slots) == 16
    assert slots[0].slot_id == "2024-01-02T09:00:00.000Z"
    assert slots[-1].slot_id == "2024-01-02T16:30:00.000Z"


def test_booked_start_excluded(db, make_user, make_booking):
    user = make_user()
    make_booking(user, "2024-01-02T09:00:00.000Z", "2024-01-02T09:30:00.000Z")
    make_booking(user, "2024-01-02T13:30:00.000Z", "2024-01-02T14:00:00.000Z")

    ids = _ids(list_available(db, DAY, DAY, HOURS))
    assert len(ids) == 14
    assert "2024-01-02T09:00:00.000Z" not in ids
    assert "2024-01-02T13:30:00.000Z" not in ids


def test_bookings_outside_range_ignored(db, make_user, make_booking):
    user = make_user()
    make_booking(user, "2024-01-03T09:00:00.000Z", "2024-01-03T09:30:00.000Z")
    assert len(list_available(db, DAY, DAY, HOURS)) == 16


def test_off_grid_booking_does_not_hide_grid_slots(db, make_user, make_booking):
    user = make_user()
    make_booking(user, "2024-01-02T09:10:00.000Z", "2024-01-02T09:40:00.000Z")
    assert len(list_available(db, DAY, DAY, HOURS)) == 16


def test_multi_day(db, make_user, make_booking):
    user = make_user()
    make_booking(user, "2024-01-03T16:30:00.000Z", "2024-01-03T17:00:00.000Z")

    ids = _ids(list_available(db, DAY, date(2024, 1, 3), HOURS))
    assert len(ids) == 31
    assert ids == sorted(ids)
    assert "2024-01-03T16:30:00.000Z" not in ids


def test_reversed_range_empty(db):
    assert list_available(db, date(2024, 1, 3), DAY, HOURS) == []


def test_reserve_then_cancel_round_trip(db, make_user):
    user = make_user()
    slot_id = "2024-01-02T11:00:00.000Z"

    booking = reserve(db, user.id, user.name, slot_id, HOURS, strict_grid=False)
    assert slot_id not in _ids(list_available(db, DAY, DAY, HOURS))

    cancel(db, identity_of(user), booking.id)
    assert slot_id in _ids(list_available(db, DAY, DAY, HOURS))


class TestParseRange:
    def test_valid(self):
        assert parse_range("2024-01-02", "2024-01-05", HOURS) == (DAY, date(2024, 1, 5))

    @pytest.mark.parametrize("raw_from, raw_to", [(None, "2024-01-02"), ("2024-01-02", None), ("", "")])
    def test_missing(self, raw_from, raw_to):
        with pytest.raises(InvalidRange):
            parse_range(raw_from, raw_to, HOURS)

    def test_unparseable(self):
        with pytest.raises(InvalidRange):
            parse_range("2024-01-02", "next week", HOURS)

    def test_range_wider_than_limit(self):
        with pytest.raises(InvalidRange):
            parse_range("2024-01-01", "2024-01-10", HOURS, max_days=5)

    def test_range_at_limit(self):
        assert parse_range("2024-01-01", "2024-01-05", HOURS, max_days=5) == (date(2024, 1, 1), date(2024, 1, 5))

    def test_whole_calendar_rejected_by_default(self):
        with pytest.raises(InvalidRange):
            parse_range("0001-01-01", "9999-12-30", HOURS)

    def test_reversed_range_not_limited(self):
        assert parse_range("2024-03-01", "2024-01-01", HOURS, max_days=5) == (date(2024, 3, 1), date(2024, 1, 1))


def test_last_representable_day_is_invalid_range(db):
    with pytest.raises(InvalidRange):
        list_available(db, date.max, date.max, HOURS)
