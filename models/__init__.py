"""
Vehicle reservation models.

This package provides the data models and scheduling logic:
- Vehicle / VehicleType: Bookable company cars
- Reservation: A time-bounded booking of one vehicle on one day
- DayStatus: Day occupancy (AVAILABLE, PARTIAL, FULL)
- TimeSlot / DayCell: Day schedule hours and calendar grid cells
- ReservationStore: Owns vehicles and reservations, persists them
- availability / calendar_grid: Pure occupancy, conflict and date-range functions
"""

from .errors import (
    ReservationError,
    InvalidTimeFormat,
    InvalidInterval,
    ConflictError,
    PersistenceError,
)
from .status import DayStatus
from .vehicle import Vehicle, VehicleType, DEFAULT_VEHICLES
from .reservation import Reservation
from .slots import TimeSlot, DayCell
from .availability import (
    time_to_minutes,
    validate_interval,
    find_conflicts,
    check_availability,
    occupancy_ratio,
    get_day_status,
    get_day_schedule,
)
from .calendar_grid import get_month_days, get_week_start, get_week_days, month_start
from .blob_store import BlobStore, MemoryBlobStore, DirectoryBlobStore
from .store import ReservationStore

__all__ = [
    "ReservationError",
    "InvalidTimeFormat",
    "InvalidInterval",
    "ConflictError",
    "PersistenceError",
    "DayStatus",
    "Vehicle",
    "VehicleType",
    "DEFAULT_VEHICLES",
    "Reservation",
    "TimeSlot",
    "DayCell",
    "time_to_minutes",
    "validate_interval",
    "find_conflicts",
    "check_availability",
    "occupancy_ratio",
    "get_day_status",
    "get_day_schedule",
    "get_month_days",
    "get_week_start",
    "get_week_days",
    "month_start",
    "BlobStore",
    "MemoryBlobStore",
    "DirectoryBlobStore",
    "ReservationStore",
]
