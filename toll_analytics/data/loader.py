"""
Upload decoding: delimited text or spreadsheet bytes → canonical toll records.
"""
from __future__ import annotations

import csv
import io
from typing import Optional

import pandas as pd

from toll_analytics.config import (
    COLUMN_ALIASES, CSV_DELIMITERS, CSV_EXTENSIONS, MISSING_LOCATION, SPREADSHEET_EXTENSIONS,
)
from toll_analytics.data.normalize import (
    clean_text, find_column, parse_amount, parse_date,
)
from toll_analytics.data.schemas import TollRecord
from toll_analytics.exceptions import FormatError

_ZIP_MAGIC = b"PK\x03\x04"
_OLE_MAGIC = b"\xd0\xcf\x11\xe0"


# ---------------------------------------------------------------------------
# Column mapping
# ---------------------------------------------------------------------------

def _clean_headers(columns) -> list[str]:
    """Trim headers; pandas placeholders for blank headers become ''."""
    headers = []
    for c in columns:
        h = str(c).strip()
        if h.startswith("Unnamed:"):
            h = ""
        headers.append(h)
    return headers


def _map_columns(headers: list[str]) -> dict[str, int]:
    """Resolve each logical field to a column index (-1 when absent)."""
    return {name: find_column(headers, *aliases) for name, aliases in COLUMN_ALIASES.items()}


def _row_to_record(values: list[str], headers: list[str], columns: dict[str, int]) -> TollRecord:
    def get(name: str) -> str:
        i = columns[name]
        return values[i] if i >= 0 else ""

    posting_date = parse_date(get("posting_date"))
    exit_date = parse_date(get("exit_date"))
    return TollRecord(
        amount=parse_amount(get("amount")),
        # exit time is when the travel happened; posting can lag by days
        date=exit_date or posting_date,
        posting_date=posting_date,
        exit_date=exit_date,
        transponder=clean_text(get("transponder")),
        exit_interchange=clean_text(get("exit_interchange")) or MISSING_LOCATION,
        transaction=clean_text(get("transaction")),
        vehicle_class=clean_text(get("vehicle_class")),
        license_state=clean_text(get("license_state")),
        license_plate=clean_text(get("license_plate")),
        raw={h or f"column_{i}": v for i, (h, v) in enumerate(zip(headers, values))},
    )


# ---------------------------------------------------------------------------
# Delimited text
# ---------------------------------------------------------------------------

def _detect_separator(text: str) -> str:
    """Pick the separator from the header line; comma when nothing else fits."""
    header = next((line for line in text.splitlines() if line.strip()), "")
    try:
        return csv.Sniffer().sniff(header, delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        return ","


def parse_csv_text(text: str, sep: Optional[str] = None) -> list[TollRecord]:
    """Parse toll CSV text (full transaction export or Amount-only) into records.

    The separator is detected from the header line unless ``sep`` is given.
    """
    if text is None or not str(text).strip():
        raise FormatError("File is empty")

    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=sep or _detect_separator(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            on_bad_lines="skip",
        )
    except pd.errors.EmptyDataError as exc:
        raise FormatError("File has no header row") from exc
    except pd.errors.ParserError as exc:
        raise FormatError(f"Failed to parse CSV: {exc}") from exc

    headers = _clean_headers(df.columns)
    if not any(headers):
        raise FormatError("File has no header row")

    columns = _map_columns(headers)
    if columns["amount"] == -1:
        raise FormatError('File must contain an "Amount" column')

    df = df.fillna("")
    return [
        _row_to_record(list(values), headers, columns)
        for values in df.itertuples(index=False, name=None)
    ]


# ---------------------------------------------------------------------------
# Spreadsheets
# ---------------------------------------------------------------------------

def _excel_engine(buffer: bytes, filename: Optional[str]) -> str:
    """Workbook signature first; portals often name xlsx exports .xls."""
    if buffer[:4] == _ZIP_MAGIC:
        return "openpyxl"
    if buffer[:4] == _OLE_MAGIC:
        return "xlrd"
    if filename and filename.lower().endswith(".xls"):
        return "xlrd"
    return "openpyxl"


def spreadsheet_to_csv(buffer: bytes, filename: Optional[str] = None) -> str:
    """Render the first sheet of a workbook as CSV text."""
    try:
        book = pd.ExcelFile(io.BytesIO(buffer), engine=_excel_engine(buffer, filename))
    except Exception as exc:
        raise FormatError(f"Could not read spreadsheet: {exc}") from exc

    with book:
        if not book.sheet_names:
            raise FormatError("Excel file has no sheets")
        sheet = book.parse(book.sheet_names[0], header=None, dtype=object)

    sheet = sheet.dropna(how="all")
    csv = sheet.to_csv(index=False, header=False)
    if not csv.strip():
        raise FormatError("First sheet is empty")
    return csv


def parse_spreadsheet(buffer: bytes, filename: Optional[str] = None) -> list[TollRecord]:
    """First sheet → CSV → the same parser as delimited uploads."""
    return parse_csv_text(spreadsheet_to_csv(buffer, filename), sep=",")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _decode_text(content: bytes | str) -> str:
    if isinstance(content, str):
        return content.lstrip("\ufeff")
    return content.decode("utf-8-sig", errors="replace")


def load_records(content: bytes | str, filename: Optional[str] = None) -> list[TollRecord]:
    """Normalize one uploaded file into toll records.

    Dispatches on the filename extension when given, otherwise sniffs the
    bytes for a workbook signature. Raises FormatError when the upload
    cannot be used at all.
    """
    if filename:
        name = filename.lower()
        if name.endswith(SPREADSHEET_EXTENSIONS):
            if isinstance(content, str):
                raise FormatError("Spreadsheet upload must be binary")
            return parse_spreadsheet(content, filename)
        if not name.endswith(CSV_EXTENSIONS):
            raise FormatError("Please select a CSV or Excel (.xlsx, .xls) file.")
        return parse_csv_text(_decode_text(content))

    if isinstance(content, bytes) and content[:4] in (_ZIP_MAGIC, _OLE_MAGIC):
        return parse_spreadsheet(content)
    return parse_csv_text(_decode_text(content))
