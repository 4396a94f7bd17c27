"""ReservationStore - owns vehicles and reservations and persists them."""

import logging
from datetime import date
from typing import List, Optional, Union

from .availability import (
    check_availability,
    find_conflicts,
    get_day_schedule,
    get_day_status,
    time_to_minutes,
    validate_interval,
)
from .blob_store import BlobStore
from .errors import ConflictError
from .reservation import Reservation
from .serialization import (
    RESERVATIONS_KEY,
    VEHICLES_KEY,
    decode_reservations,
    decode_vehicles,
    encode_reservations,
    encode_vehicles,
)
from .slots import TimeSlot
from .status import DayStatus
from .vehicle import DEFAULT_VEHICLES, Vehicle, VehicleType

logger = logging.getLogger(__name__)


def _next_id(items) -> int:
    return max((item.id for item in items), default=0) + 1


class ReservationStore:
    """
    Vehicle and reservation collections backed by a blob store.

    Collections are only replaced after the blob write succeeds, so a
    PersistenceError leaves the in-memory state as it was.
    """

    def __init__(self, blobs: BlobStore):
        self.blobs = blobs
        self.vehicles: List[Vehicle] = self.load_vehicles()
        self.reservations: List[Reservation] = self.load_reservations()
        self._next_vehicle_id = _next_id(self.vehicles)
        self._next_reservation_id = _next_id(self.reservations)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load_vehicles(self) -> List[Vehicle]:
        """Read vehicles from the blob store, or the default fleet if none saved."""
        blob = self.blobs.get(VEHICLES_KEY)
        if blob is None:
            return list(DEFAULT_VEHICLES)
        return decode_vehicles(blob)

    def load_reservations(self) -> List[Reservation]:
        blob = self.blobs.get(RESERVATIONS_KEY)
        if blob is None:
            return []
        return decode_reservations(blob)

    def save_vehicles(self, vehicles: Optional[List[Vehicle]] = None) -> None:
        if vehicles is None:
            vehicles = self.vehicles
        self.blobs.set(VEHICLES_KEY, encode_vehicles(vehicles))

    def save_reservations(
        self, reservations: Optional[List[Reservation]] = None
    ) -> None:
        if reservations is None:
            reservations = self.reservations
        self.blobs.set(RESERVATIONS_KEY, encode_reservations(reservations))

    # -------------------------------------------------------------------------
    # Vehicles
    # -------------------------------------------------------------------------

    def add_vehicle(
        self, name: str, type: Union[VehicleType, str] = VehicleType.SEDAN
    ) -> Vehicle:
        """Create a vehicle. Names are not validated; empty is allowed."""
        vehicle = Vehicle(self._next_vehicle_id, name, VehicleType(type))
        vehicles = self.vehicles + [vehicle]
        self.save_vehicles(vehicles)
        self.vehicles = vehicles
        self._next_vehicle_id += 1
        logger.info("Added vehicle %d: %s (%s)", vehicle.id, name, vehicle.type.value)
        return vehicle

    def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        """Find a vehicle by id."""
        for vehicle in self.vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    # -------------------------------------------------------------------------
    # Reservations
    # -------------------------------------------------------------------------

    def add_reservation(self, draft: Reservation) -> Reservation:
        """
        Store a reservation after validating it.

        Raises:
            InvalidTimeFormat: a time is not HH:MM
            InvalidInterval: end time is not after start time
            ConflictError: the interval overlaps an existing reservation
        """
        validate_interval(draft.start_time, draft.end_time)

        conflicts = find_conflicts(
            self.reservations,
            draft.vehicle_id,
            draft.date,
            draft.start_time,
            draft.end_time,
        )
        if conflicts:
            logger.warning(
                "Rejected booking for vehicle %d on %s %s-%s: overlaps %s",
                draft.vehicle_id,
                draft.date.isoformat(),
                draft.start_time,
                draft.end_time,
                [r.id for r in conflicts],
            )
            taken = ", ".join(f"{r.start_time}-{r.end_time}" for r in conflicts)
            raise ConflictError(
                f"{draft.date.isoformat()} {draft.start_time}-{draft.end_time} "
                f"overlaps existing reservation(s) {taken}"
            )

        reservation = draft.with_id(self._next_reservation_id)
        reservations = self.reservations + [reservation]
        self.save_reservations(reservations)
        self.reservations = reservations
        self._next_reservation_id += 1
        logger.info(
            "Added reservation %d for vehicle %d on %s %s-%s",
            reservation.id,
            reservation.vehicle_id,
            reservation.date.isoformat(),
            reservation.start_time,
            reservation.end_time,
        )
        return reservation

    def delete_reservation(self, reservation_id: int) -> None:
        """Remove reservations with this id. Unknown ids are ignored."""
        reservations = [r for r in self.reservations if r.id != reservation_id]
        self.save_reservations(reservations)
        removed = len(self.reservations) - len(reservations)
        self.reservations = reservations
        logger.info("Deleted reservation %d (%d removed)", reservation_id, removed)

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        for reservation in self.reservations:
            if reservation.id == reservation_id:
                return reservation
        return None

    def reservations_for(self, vehicle_id: int) -> List[Reservation]:
        """A vehicle's reservations ordered by date, then start time."""
        return sorted(
            (r for r in self.reservations if r.vehicle_id == vehicle_id),
            key=lambda r: (r.date, time_to_minutes(r.start_time)),
        )

    # -------------------------------------------------------------------------
    # Availability over the current snapshot
    # -------------------------------------------------------------------------

    def check_availability(
        self, vehicle_id: int, day: date, start_time: str, end_time: str
    ) -> bool:
        return check_availability(
            self.reservations, vehicle_id, day, start_time, end_time
        )

    def get_day_status(self, vehicle_id: int, day: date) -> DayStatus:
        return get_day_status(self.reservations, vehicle_id, day)

    def get_day_schedule(self, vehicle_id: int, day: date) -> List[TimeSlot]:
        return get_day_schedule(self.reservations, vehicle_id, day)
