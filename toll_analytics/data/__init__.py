"""Record loading, normalization, period filtering and the in-memory store."""
from .loader import load_records, parse_csv_text, parse_spreadsheet
from .store import DataStore
from .schemas import PeriodFilter, PeriodType, TollRecord
from .filters import filter_by_period, narrow_to_range, records_on_day
from .normalize import find_column, normalize_header, parse_amount, parse_date
