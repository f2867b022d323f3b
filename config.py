"""
config.py
---------
Central configuration module. Loads environment variables from the
.env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── CSV ───────────────────────────────────────────────────
CSV_DELIMITER: str = os.getenv("VET_CSV_DELIMITER", ";")
CSV_DATE_FORMAT: str = "%d/%m/%Y"

# ── Data files ────────────────────────────────────────────
DATA_DIR: str = os.getenv("VET_DATA_DIR", "data")

ANIMALS_CSV_PATH: str = os.getenv("VET_ANIMALS_CSV", os.path.join(DATA_DIR, "animals.csv"))
OWNERS_CSV_PATH: str = os.getenv("VET_OWNERS_CSV", os.path.join(DATA_DIR, "owners.csv"))
VACCINES_CSV_PATH: str = os.getenv("VET_VACCINES_CSV", os.path.join(DATA_DIR, "vaccines.csv"))

ANIMALS_SNAPSHOT_PATH: str = os.getenv(
    "VET_ANIMALS_SNAPSHOT", os.path.join(DATA_DIR, "animals.bin")
)
OWNERS_SNAPSHOT_PATH: str = os.getenv(
    "VET_OWNERS_SNAPSHOT", os.path.join(DATA_DIR, "owners.bin")
)
EXPIRED_REPORT_PATH: str = os.getenv(
    "VET_EXPIRED_REPORT", os.path.join(DATA_DIR, "animals_report.csv")
)

# ── Vaccination ───────────────────────────────────────────
VACCINE_VALIDITY_MONTHS: int = 6

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("VET_LOG_LEVEL", "INFO").upper()
