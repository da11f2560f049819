"""
Toll Analytics — Configuration: column aliases, parsing formats, analysis constants.
"""
import re
from datetime import timedelta

# ---------------------------------------------------------------------------
# Column aliases (first header matching any alias wins, see find_column)
# Operators rename columns between exports, so each logical field accepts
# several spellings. Earlier aliases are tried first.
# ---------------------------------------------------------------------------
COLUMN_ALIASES = {
    "amount": ["Amount"],
    "posting_date": ["Posting Date"],
    "exit_date": ["Exit Date"],
    "transaction": ["Transaction"],
    "transponder": ["Transponder"],
    "exit_interchange": ["Exit Interchange"],
    "vehicle_class": ["Class"],
    "license_state": ["License State"],
    "license_plate": ["License Plate", "License"],
}

# ---------------------------------------------------------------------------
# Cell parsing
# ---------------------------------------------------------------------------

# Currency symbols, thousands separators and stray whitespace
AMOUNT_STRIP_RE = re.compile(r"[\$€£¥,\s]")

# Tried in order before falling back to a free-form parse
DATE_FORMATS = [
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
]

# ---------------------------------------------------------------------------
# Accepted uploads
# ---------------------------------------------------------------------------
CSV_EXTENSIONS = (".csv", ".txt")
# Separators accepted in delimited exports, in order of preference
CSV_DELIMITERS = ",\t;|"
SPREADSHEET_EXTENSIONS = (".xlsx", ".xls")
MAX_UPLOAD_BYTES = 50 * 1024 * 1024

# ---------------------------------------------------------------------------
# Display sentinels
# ---------------------------------------------------------------------------
MISSING_LOCATION = "—"
UNASSIGNED_LABEL = "Unassigned"
VEHICLE_LABEL = "Vehicle {n}"

# ---------------------------------------------------------------------------
# Analysis constants
# ---------------------------------------------------------------------------
JOURNEY_GAP = timedelta(hours=2)
MIN_WEEKS = 0.5
TOP_LOCATIONS_LIMIT = 10
DAY_BREAKDOWN_LIMIT = 20
TRAVEL_TOP_LOCATIONS = 5

# Sunday-first, matching the weekday tally in travel summaries
WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
