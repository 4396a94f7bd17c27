"""Reservation class for vehicle bookings."""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Reservation:
    """
    A booking of one vehicle for a time range on one day.

    Times are "HH:MM" strings; end_time is exclusive. A reservation
    without an id is a draft that has not been stored yet.
    """

    vehicle_id: int
    date: date
    start_time: str
    end_time: str
    user_name: str
    department: str
    purpose: Optional[str] = None
    id: Optional[int] = None

    @property
    def is_draft(self) -> bool:
        return self.id is None

    def with_id(self, reservation_id: int) -> "Reservation":
        """Copy of this reservation with the given id assigned."""
        return replace(self, id=reservation_id)

    def is_on(self, vehicle_id: int, day: date) -> bool:
        """Check if this reservation belongs to a vehicle-day."""
        return self.vehicle_id == vehicle_id and self.date == day
