"""Vehicle class for shared company cars."""

from dataclasses import dataclass
from enum import Enum


class VehicleType(Enum):
    """Body type of a vehicle."""

    SEDAN = "sedan"
    VAN = "van"
    KEI = "kei"
    SUV = "suv"


@dataclass(frozen=True)
class Vehicle:
    """A bookable vehicle."""

    id: int
    name: str
    type: VehicleType = VehicleType.SEDAN


DEFAULT_VEHICLES = (
    Vehicle(1, "Company Car A (Sedan)", VehicleType.SEDAN),
    Vehicle(2, "Company Car B (Van)", VehicleType.VAN),
    Vehicle(3, "Kei Car", VehicleType.KEI),
)
