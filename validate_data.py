#!/usr/bin/env python3
"""Validate the persisted vehicle and reservation blobs against the schema."""
import json
import sys
from pathlib import Path
from typing import Optional

from jsonschema import validate, ValidationError

import config
from models.serialization import (
    RESERVATIONS_KEY,
    VEHICLES_KEY,
    BlobValidator,
    schema_for,
)


def validate_blob_file(filepath: Path, key: str) -> list[str]:
    """Validate a single blob file. Returns list of errors."""
    errors = []
    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        validate(instance=data, schema=schema_for(key), cls=BlobValidator)
    except json.JSONDecodeError as e:
        errors.append(f"JSON parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except (OSError, UnicodeDecodeError) as e:
        errors.append(f"Error: {e}")
    return errors


def main(data_dir: Optional[Path] = None) -> int:
    """Validate vehicles.json and reservations.json in the data directory."""
    data_dir = Path(data_dir or config.DATA_DIR)

    if not data_dir.exists():
        print(f"Error: data directory not found: {data_dir}")
        return 1

    all_valid = True
    for key in (VEHICLES_KEY, RESERVATIONS_KEY):
        filepath = data_dir / f"{key}.json"
        if not filepath.exists():
            print(f"SKIP: {filepath.name} (not saved yet)")
            continue
        errors = validate_blob_file(filepath, key)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main(Path(sys.argv[1]) if len(sys.argv) > 1 else None))
