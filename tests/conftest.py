"""Shared fixtures for toll analytics tests."""
import datetime as dt
import io

import pytest
from openpyxl import Workbook

from toll_analytics.data.schemas import TollRecord

SAMPLE_CSV = """Posting Date,Exit Date,Transaction,Transponder,Exit Interchange,Class,License State,License Plate,Amount
01/02/2024,01/01/2024 09:00 AM,Toll,T-100,A,2,PA,ABC1234,$2.00
01/02/2024,01/01/2024 10:30 AM,Toll,T-100,B,2,PA,ABC1234,$3.00
01/04/2024,01/03/2024 09:00 AM,Toll,T-200,A,2,NJ,XYZ9876,$2.00
"""


def make_record(amount=100, when=None, transponder="", location="A", **kwargs) -> TollRecord:
    """Build a TollRecord with ``when`` as both exit and canonical date."""
    return TollRecord(
        amount=amount,
        date=when,
        exit_date=when,
        transponder=transponder,
        exit_interchange=location,
        **kwargs,
    )


def workbook_bytes(rows, extra_sheets=()) -> bytes:
    """Serialize rows into an in-memory xlsx with the rows on the first sheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Transactions"
    for row in rows:
        ws.append(row)
    for name in extra_sheets:
        wb.create_sheet(name).append(["ignored"])
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def scenario_records():
    """The three-pass scenario: two passes on Jan 1 (A then B), one on Jan 3 (A)."""
    return [
        make_record(200, dt.datetime(2024, 1, 1, 9, 0), "T-100", "A"),
        make_record(300, dt.datetime(2024, 1, 1, 10, 30), "T-100", "B"),
        make_record(200, dt.datetime(2024, 1, 3, 9, 0), "T-200", "A"),
    ]
