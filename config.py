"""
Application configuration read from the environment.

Shared by the reserve CLI, the web app and validate_data.
"""

import os
from pathlib import Path

# Directory holding vehicles.json and reservations.json
DATA_DIR = Path(
    os.environ.get("CAR_RESERVE_DATA_DIR") or Path(__file__).parent / "data"
)

SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-prod"

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").upper()
