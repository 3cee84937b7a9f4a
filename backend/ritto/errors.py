"""
Booking engine error taxonomy.

Every error is recoverable at the request boundary. ``main.py`` maps each
class to an HTTP status; service functions raise them directly.
"""


class BookingEngineError(Exception):
    """Base class for all domain errors."""

    code = "booking_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingEngineError):
    """Malformed input: missing date, non-positive duration, inverted range."""

    code = "validation_error"
    status_code = 422


class NotFound(BookingEngineError):
    code = "not_found"
    status_code = 404


class OverlapError(BookingEngineError):
    """A new weekly window collides with an existing one on the same weekday."""

    code = "schedule_overlap"
    status_code = 409

    def __init__(self, weekday: str):
        super().__init__(f"Schedule overlaps an existing window on {weekday}")
        self.weekday = weekday


class SlotUnavailable(BookingEngineError):
    """The slot has no remaining capacity; refresh the slot list and retry."""

    code = "slot_unavailable"
    status_code = 409


class IllegalTransition(BookingEngineError):
    code = "illegal_transition"
    status_code = 409

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move booking from {current} to {target}")
        self.current = current
        self.target = target


class BookingClosed(BookingEngineError):
    """The business is not allowed to accept bookings right now."""

    code = "booking_closed"
    status_code = 403


class CollaboratorUnavailable(BookingEngineError):
    """Store, payment or notification backend failed or timed out (retryable)."""

    code = "collaborator_unavailable"
    status_code = 503
