"""Exception types raised by the reservation models."""


class ReservationError(Exception):
    """Base class for reservation scheduler errors."""


class InvalidTimeFormat(ReservationError, ValueError):
    """A time string is not a well-formed 24-hour HH:MM value."""


class InvalidInterval(ReservationError, ValueError):
    """End time is not strictly after start time."""


class ConflictError(ReservationError):
    """The requested interval overlaps an existing reservation."""


class PersistenceError(ReservationError):
    """Blob store read, write or deserialization failure."""
