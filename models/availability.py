"""Occupancy and conflict calculations over a set of reservations."""

import math
import re
from datetime import date
from typing import Iterable, List, Tuple

from .errors import InvalidInterval, InvalidTimeFormat
from .reservation import Reservation
from .slots import TimeSlot
from .status import DayStatus

OPEN_MINUTES = 8 * 60
CLOSE_MINUTES = 20 * 60
OPERATING_MINUTES = CLOSE_MINUTES - OPEN_MINUTES
FULL_THRESHOLD = 0.8

_TIME_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")


def time_to_minutes(time: str) -> int:
    """Convert an "HH:MM" 24-hour time to minutes since midnight."""
    if not isinstance(time, str):
        raise InvalidTimeFormat(f"Time must be a string, got {time!r}")
    match = _TIME_RE.fullmatch(time)
    if not match:
        raise InvalidTimeFormat(f"Time must be HH:MM, got {time!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours >= 24 or minutes >= 60:
        raise InvalidTimeFormat(f"Time out of range: {time!r}")
    return hours * 60 + minutes


def validate_interval(start_time: str, end_time: str) -> Tuple[int, int]:
    """Return (start, end) minute offsets, requiring end after start."""
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    if end <= start:
        raise InvalidInterval(
            f"End time {end_time} must be after start time {start_time}"
        )
    return start, end


def reservations_on(
    reservations: Iterable[Reservation], vehicle_id: int, day: date
) -> List[Reservation]:
    """Filter reservations down to one vehicle-day."""
    return [r for r in reservations if r.is_on(vehicle_id, day)]


def find_conflicts(
    reservations: Iterable[Reservation],
    vehicle_id: int,
    day: date,
    start_time: str,
    end_time: str,
) -> List[Reservation]:
    """
    Find reservations overlapping the proposed interval.

    Intervals are half-open, so a booking ending at 11:00 does not
    conflict with one starting at 11:00.
    """
    new_start = time_to_minutes(start_time)
    new_end = time_to_minutes(end_time)
    conflicts = []
    for r in reservations_on(reservations, vehicle_id, day):
        res_start = time_to_minutes(r.start_time)
        res_end = time_to_minutes(r.end_time)
        if not (new_end <= res_start or new_start >= res_end):
            conflicts.append(r)
    return conflicts


def check_availability(
    reservations: Iterable[Reservation],
    vehicle_id: int,
    day: date,
    start_time: str,
    end_time: str,
) -> bool:
    """True if no reservation for the vehicle-day overlaps the interval."""
    return not find_conflicts(reservations, vehicle_id, day, start_time, end_time)


def occupancy_ratio(
    reservations: Iterable[Reservation], vehicle_id: int, day: date
) -> float:
    """
    Reserved share of operating hours for a vehicle-day.

    Each reservation is clipped to 08:00-20:00 and the clipped minutes
    are summed without merging overlaps.
    """
    reserved = 0
    for r in reservations_on(reservations, vehicle_id, day):
        start = max(time_to_minutes(r.start_time), OPEN_MINUTES)
        end = min(time_to_minutes(r.end_time), CLOSE_MINUTES)
        if end > start:
            reserved += end - start
    return reserved / OPERATING_MINUTES


def get_day_status(
    reservations: Iterable[Reservation], vehicle_id: int, day: date
) -> DayStatus:
    """Classify a vehicle-day as available, partial or full."""
    day_reservations = reservations_on(reservations, vehicle_id, day)
    if not day_reservations:
        return DayStatus.AVAILABLE

    ratio = occupancy_ratio(day_reservations, vehicle_id, day)
    if ratio >= FULL_THRESHOLD:
        return DayStatus.FULL
    if ratio > 0:
        return DayStatus.PARTIAL
    return DayStatus.AVAILABLE


def get_day_schedule(
    reservations: Iterable[Reservation], vehicle_id: int, day: date
) -> List[TimeSlot]:
    """
    Build hourly slots 08:00..19:00 for a vehicle-day.

    A reservation occupies every hour it touches: one ending at 14:30
    covers the 14:00 slot.
    """
    day_reservations = reservations_on(reservations, vehicle_id, day)
    spans = []
    for r in day_reservations:
        start_hour = time_to_minutes(r.start_time) // 60
        end_hour = math.ceil(time_to_minutes(r.end_time) / 60)
        spans.append((r, start_hour, end_hour))

    schedule = []
    for hour in range(OPEN_MINUTES // 60, CLOSE_MINUTES // 60):
        covering = [r for r, start, end in spans if start <= hour < end]
        schedule.append(TimeSlot(hour=hour, reservations=covering))
    return schedule
