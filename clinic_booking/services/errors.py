# clinic_booking/services/errors.py
"""
Domain outcomes.

Services raise these; main.py renders them as
{"error": {"code": ..., "message": ...}} with `status_code`.
Conflicts and authorization failures stay distinguishable from
infrastructure faults so clients can decide whether a retry makes sense.
"""


class BookingError(Exception):
    status_code = 500
    code = "SERVER_ERROR"
    default_message = "Internal server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(BookingError):
    status_code = 400
    code = "BAD_REQUEST"
    default_message = "Malformed or missing input."


class InvalidRange(InvalidRequest):
    default_message = "`from` and `to` query parameters are required."


class InvalidBookingId(InvalidRequest):
    code = "INVALID_ID"
    default_message = "Invalid booking id."


class SlotOutsideGrid(InvalidRequest):
    code = "SLOT_OUTSIDE_GRID"
    default_message = "Requested time is not a slot within clinic hours."


class UserExists(InvalidRequest):
    code = "USER_EXISTS"
    default_message = "User already exists."


class SlotTaken(BookingError):
    status_code = 409
    code = "SLOT_TAKEN"
    default_message = "This slot has already been booked."


class NotFound(BookingError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Booking not found."


class Unauthorized(BookingError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Authentication required."


class InvalidCredentials(Unauthorized):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password."


class Forbidden(BookingError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "You are not allowed to perform this action."


class StoreUnavailable(BookingError):
    default_message = "Booking store is unavailable."
