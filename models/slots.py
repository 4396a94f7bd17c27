"""Dataclasses for schedule slots and calendar cells."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .reservation import Reservation


@dataclass
class TimeSlot:
    """One hour of a vehicle's day schedule."""

    hour: int
    reservations: List["Reservation"] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return not self.reservations

    @property
    def label(self) -> str:
        """Hour range label, e.g. '08:00 - 09:00'."""
        return f"{self.hour:02d}:00 - {self.hour + 1:02d}:00"


@dataclass(frozen=True)
class DayCell:
    """A day in a month calendar grid."""

    date: date
    other_month: bool = False
