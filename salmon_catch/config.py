import os
from pathlib import Path

# Root-relative data directories
DATA_DIR = Path("data")
RAW_DIR = DATA_DIR / "raw"
PROC_DIR = DATA_DIR / "processed"

# KNB archive objects (Byerly 1999, Alaska commercial salmon catches)
CATCH_URL = os.getenv(
    "SALMON_CATCH_URL",
    "https://knb.ecoinformatics.org/knb/d1/mn/v2/object/df35b.302.1",
)
REGION_DEFS_URL = os.getenv(
    "SALMON_REGION_DEFS_URL",
    "https://knb.ecoinformatics.org/knb/d1/mn/v2/object/df35b.303.1",
)
REQUEST_TIMEOUT = float(os.getenv("SALMON_REQUEST_TIMEOUT", "30"))

# Species columns of the wide catch table
SPECIES = ["Chinook", "Sockeye", "Coho", "Pink", "Chum"]
ID_COLUMNS = ["Region", "Year"]

# Totals and free-text notes; not per-species measures
DROP_COLS = ["All", "notesRegCode"]

# Chinook has a single OCR'd "I" where a "1" was meant
TARGET_COLUMN = "Chinook"
SENTINEL = "I"
SENTINEL_REPLACEMENT = "1"

# Long-form column names
NAMES_COLUMN = "species"
VALUES_COLUMN = "catch"

# Source counts are in thousands of fish
CATCH_SCALE = 1000
