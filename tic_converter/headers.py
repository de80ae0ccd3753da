from __future__ import annotations
from typing import List, Optional, Sequence
import datetime

from dateutil.relativedelta import relativedelta

from .layout import LAYOUT, DOCUMENT
from .types import FormatError, SourceMetadata

def to_iso_date(raw: str) -> str:
    """MM_DD_YYYY -> YYYY-MM-DD. Month and day are zero padded."""
    parts = raw.split(LAYOUT["date_separator"])
    if len(parts) != 3:
        raise FormatError(f"Last updated date '{raw}' is not in MM_DD_YYYY form")
    month, day, year = parts
    iso = f"{year}-{month.zfill(2)}-{day.zfill(2)}"
    try:
        datetime.date.fromisoformat(iso)
    except ValueError as e:
        raise FormatError(f"Last updated date '{raw}' is not a calendar date: {e}") from e
    return iso

def expiration_from(iso_date: str, days: Optional[int] = None) -> str:
    # fixed day count, not "+1 year"
    days = DOCUMENT["expiration_days"] if days is None else days
    start = datetime.date.fromisoformat(iso_date)
    try:
        return (start + relativedelta(days=days)).isoformat()
    except OverflowError as e:
        raise FormatError(f"Expiration date for {iso_date} is out of range") from e

def extract_metadata(rows: Sequence[Sequence[str]]) -> SourceMetadata:
    idx = LAYOUT["metadata_row"]
    if len(rows) <= idx:
        raise FormatError(f"Missing hospital metadata row (row {idx + 1})")
    row = rows[idx]
    if len(row) < 4:
        raise FormatError(f"Hospital metadata row has {len(row)} fields, expected at least 4")

    hospital_name, last_updated_raw, hospital_address, license_number = row[:4]
    last_updated_on = to_iso_date(last_updated_raw)
    return SourceMetadata(
        hospital_name=hospital_name,
        last_updated_raw=last_updated_raw,
        hospital_address=hospital_address,
        license_number=license_number,
        last_updated_on=last_updated_on,
        expiration_date=expiration_from(last_updated_on),
    )

def extract_headers(rows: Sequence[Sequence[str]]) -> List[str]:
    idx = LAYOUT["header_row"]
    if len(rows) <= idx:
        raise FormatError(f"Missing column header row (row {idx + 1})")
    return list(rows[idx])
