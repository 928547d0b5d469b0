"""
Central configuration for the tournament standings engine.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

from pathlib import Path
from types import MappingProxyType

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"
OUTPUT_FOLDER = DATA_FOLDER / "processed"
ASSETS_FOLDER = DATA_FOLDER / "raw"

# Input/output file patterns
CATCHES_PATTERN = "catches_*.csv"
SCORING_FORMAT_FILE = "scoring_format.json"
STANDINGS_PREFIX = "standings"

# --- Scoring Formats ---
# Allowed scoring formats (for validation)
ALLOWED_FORMATS = frozenset({"weight", "length", "count"})
DEFAULT_FORMAT = "weight"
DEFAULT_TIE_BREAK = "first_seen"
ALLOWED_TIE_BREAKS = frozenset({"first_seen", "team_id"})
DEFAULT_SPECIES_MULTIPLIER = 1.0

# Keys a stored scoring-format record uses in its rules JSON
RULE_MAX_CATCHES_KEYS = ("fishLimit", "maxCatches")
RULE_MINIMUM_SIZE = "minimumSize"
RULE_SPECIES_MULTIPLIER = "speciesMultiplier"
RULE_TIE_BREAK = "tieBreak"

# --- Units ---
# Canonical units: weight in ounces, length in inches
OUNCES_PER_POUND = 16
OUNCES_PER_KILOGRAM = 35.27396195
INCHES_PER_CENTIMETER = 1 / 2.54
WEIGHT_UNITS = MappingProxyType({"oz": 1.0, "lb": OUNCES_PER_POUND, "lbs": OUNCES_PER_POUND, "kg": OUNCES_PER_KILOGRAM})
LENGTH_UNITS = MappingProxyType({"in": 1.0, "inches": 1.0, "cm": INCHES_PER_CENTIMETER})

# --- Input Validation ---
MAX_WEIGHT_OZ = 10_000  # ~600 lb
MAX_LENGTH_IN = 200     # ~16 ft
LEADERBOARD_PREVIEW_ROWS = 20
