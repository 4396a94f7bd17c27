"""JSON encoding and schema validation for persisted blobs."""

import json
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import yaml
from jsonschema import Draft7Validator, ValidationError, validate
from jsonschema.validators import extend

from .availability import validate_interval
from .errors import PersistenceError
from .reservation import Reservation
from .vehicle import Vehicle, VehicleType

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"

VEHICLES_KEY = "vehicles"
RESERVATIONS_KEY = "reservations"


def _is_strict_integer(checker, instance) -> bool:
    # Floats such as 1.0 and booleans are not ids
    return isinstance(instance, int) and not isinstance(instance, bool)


BlobValidator = extend(
    Draft7Validator,
    type_checker=Draft7Validator.TYPE_CHECKER.redefine("integer", _is_strict_integer),
)


@lru_cache(maxsize=None)
def load_schema() -> Dict[str, Any]:
    """Load the blob schema from schema.yaml."""
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def schema_for(key: str) -> Dict[str, Any]:
    """Standalone schema for one blob key, keeping shared definitions."""
    schema = load_schema()
    if key not in schema:
        raise KeyError(f"No schema for blob '{key}'")
    return {
        "$schema": schema["$schema"],
        "definitions": schema["definitions"],
        **schema[key],
    }


def validate_blob(key: str, data: Any) -> None:
    """Raise PersistenceError if data does not match the schema for key."""
    try:
        validate(instance=data, schema=schema_for(key), cls=BlobValidator)
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        suffix = f" at {where}" if where else ""
        raise PersistenceError(f"Invalid '{key}' data{suffix}: {e.message}") from e


def vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    return {"id": vehicle.id, "name": vehicle.name, "type": vehicle.type.value}


def vehicle_from_dict(dct: Dict[str, Any]) -> Vehicle:
    return Vehicle(dct["id"], dct["name"], VehicleType(dct["type"]))


def reservation_to_dict(reservation: Reservation) -> Dict[str, Any]:
    """Serialize a Reservation to the camelCase blob format."""
    d: Dict[str, Any] = {
        "id": reservation.id,
        "vehicleId": reservation.vehicle_id,
        "date": reservation.date.isoformat(),
        "startTime": reservation.start_time,
        "endTime": reservation.end_time,
        "userName": reservation.user_name,
        "department": reservation.department,
    }
    if reservation.purpose is not None:
        d["purpose"] = reservation.purpose
    return d


def reservation_from_dict(dct: Dict[str, Any]) -> Reservation:
    """Build a Reservation, raising ValueError for an impossible date or interval."""
    validate_interval(dct["startTime"], dct["endTime"])
    return Reservation(
        vehicle_id=dct["vehicleId"],
        date=date.fromisoformat(dct["date"]),
        start_time=dct["startTime"],
        end_time=dct["endTime"],
        user_name=dct["userName"],
        department=dct["department"],
        purpose=dct.get("purpose"),
        id=dct["id"],
    )


def encode_vehicles(vehicles: List[Vehicle]) -> str:
    return _dumps([vehicle_to_dict(v) for v in vehicles])


def encode_reservations(reservations: List[Reservation]) -> str:
    return _dumps([reservation_to_dict(r) for r in reservations])


def decode_vehicles(blob: str) -> List[Vehicle]:
    """Parse and validate a vehicles blob."""
    data = _loads(VEHICLES_KEY, blob)
    return [vehicle_from_dict(d) for d in data]


def decode_reservations(blob: str) -> List[Reservation]:
    """Parse and validate a reservations blob."""
    data = _loads(RESERVATIONS_KEY, blob)
    try:
        return [reservation_from_dict(d) for d in data]
    except ValueError as e:
        # Rows that match the schema but are not real dates or intervals
        raise PersistenceError(f"Invalid '{RESERVATIONS_KEY}' data: {e}") from e


def _dumps(data: List[Dict[str, Any]]) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def _loads(key: str, blob: str) -> Any:
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Corrupt '{key}' blob: {e}") from e
    validate_blob(key, data)
    return data
