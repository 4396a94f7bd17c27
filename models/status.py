"""DayStatus enum for vehicle-day occupancy levels."""

from enum import Enum


class DayStatus(Enum):
    """Booking status of a vehicle on one day."""

    AVAILABLE = "available"
    PARTIAL = "partial"  # Some reservations, under the full threshold
    FULL = "full"  # 80% or more of operating hours reserved

    @property
    def symbol(self) -> str:
        """Calendar mark for this status."""
        return {
            DayStatus.AVAILABLE: "○",
            DayStatus.PARTIAL: "△",
            DayStatus.FULL: "×",
        }[self]
