"""
Reshape a hospital pricing-transparency export into an In-Network Rates
document.

Layout of the export (0-based):
  row 1      hospital name, last updated (MM_DD_YYYY), address, license/EIN
  row 3      column headers
  row 4..    data rows; columns 0-3 are code, rev code, description, setting
             and columns 9.. hold one negotiated rate per payer/plan
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union
import logging, math

import pandas as pd

from .layout import LAYOUT, DOCUMENT
from .types import (
    SourceMetadata,
    NegotiatedPrice,
    NegotiatedRateGroup,
    BillingCodeEntry,
    OutputDocument,
    ConversionSummary,
    ValidationResult,
    FormatError,
    SchemaValidationError,
)
from .detectors import (
    guess_billing_code_type,
    guess_billing_class,
    payer_name_from_header,
    is_repeated_header,
    sniff_kind_from_bytes,
)
from .headers import extract_metadata, extract_headers
from .csv_reader import read_rows
from .json_validator import validate_document
from .reporters import write_document

logger = logging.getLogger(__name__)

NON_VALUES = frozenset(LAYOUT["non_values"])


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a rate cell. Sentinels, blanks and garbage all come back as None."""
    if value is None:
        return None
    trimmed = value.strip()
    if trimmed in NON_VALUES:
        return None
    number = pd.to_numeric(trimmed.replace(",", ""), errors="coerce")
    if pd.isna(number) or math.isinf(number):
        return None
    return float(number)


def _skip_reason(row: Sequence[str]) -> Optional[str]:
    if len(row) < LAYOUT["min_fields"]:
        return f"{len(row)} fields"
    if not row[0]:
        return "empty code"
    if is_repeated_header(row):
        return "repeated header"
    return None


def collect_payer_rates(row: Sequence[str], headers: Sequence[str]) -> Dict[str, List[Tuple[str, float]]]:
    """
    Scan the payer columns of ``row`` and group qualifying rates by payer.

    Returns an insertion-ordered mapping of payer name to ``(plan, rate)``
    pairs; payers appear in the order their first qualifying column was
    seen, plans in column order.
    """
    by_payer: Dict[str, List[Tuple[str, float]]] = {}
    for j in range(LAYOUT["first_payer_column"], min(len(row), len(headers))):
        rate = parse_number(row[j])
        if rate is None or rate <= 0:
            continue
        plan_name = headers[j].strip()
        payer_name = payer_name_from_header(plan_name)
        by_payer.setdefault(payer_name, []).append((plan_name, rate))
    return by_payer


def convert_row(row: Sequence[str], headers: Sequence[str], meta: SourceMetadata) -> Optional[BillingCodeEntry]:
    """Build the in-network entry for one data row, or None if the row is skipped."""
    if _skip_reason(row) is not None:
        return None

    cpt_code = row[0].strip()
    rev_code = row[1].strip()
    description = row[2].strip()
    setting = row[3].strip()
    if not cpt_code:
        return None

    billing_class = guess_billing_class(setting)
    negotiated_rates = []
    # one rate group per qualifying column, payers in first-seen order
    for plans in collect_payer_rates(row, headers).values():
        for _plan, rate in plans:
            price = NegotiatedPrice(
                negotiated_rate=rate,
                expiration_date=meta.expiration_date,
                billing_class=billing_class,
                negotiated_type=DOCUMENT["negotiated_type"],
            )
            negotiated_rates.append(NegotiatedRateGroup(
                tin_value=meta.license_number,
                negotiated_prices=[price],
                tin_type=DOCUMENT["tin_type"],
            ))

    modifier = None
    if rev_code and rev_code != LAYOUT["not_applicable"]:
        modifier = [rev_code]

    return BillingCodeEntry(
        billing_code=cpt_code,
        billing_code_type=guess_billing_code_type(cpt_code),
        description=description,
        negotiated_rates=negotiated_rates,
        modifier=modifier,
        negotiation_arrangement=DOCUMENT["negotiation_arrangement"],
        billing_code_type_version=DOCUMENT["billing_code_type_version"],
    )


def convert_rows(rows: Sequence[Sequence[str]], *, log: Optional[logging.Logger] = None) -> Tuple[OutputDocument, ConversionSummary]:
    """
    Transform a whole table into an OutputDocument.

    Nothing outside ``rows`` is read or written; progress goes to ``log``
    (the module logger by default). Raises FormatError if the metadata or
    header rows are unusable.
    """
    log = log or logger

    meta = extract_metadata(rows)
    headers = extract_headers(rows)

    log.info(f"Hospital: {meta.hospital_name}")
    log.info(f"Last Updated: {meta.last_updated_on}")
    log.info(f"Expiration Date: {meta.expiration_date}")
    log.info("Converting to Transparency in Coverage In-Network Rates format...")

    entries: List[BillingCodeEntry] = []
    skipped = 0
    for i in range(LAYOUT["first_data_row"], len(rows)):
        entry = convert_row(rows[i], headers, meta)
        if entry is None:
            skipped += 1
            log.debug(f"Skipping row {i + 1}: {_skip_reason(rows[i]) or 'empty code'}")
            continue
        entries.append(entry)

    document = OutputDocument(
        reporting_entity_name=meta.hospital_name,
        last_updated_on=meta.last_updated_on,
        in_network=entries,
        reporting_entity_type=DOCUMENT["reporting_entity_type"],
        version=DOCUMENT["version"],
    )
    summary = ConversionSummary(
        hospital_name=meta.hospital_name,
        last_updated_on=meta.last_updated_on,
        expiration_date=meta.expiration_date,
        entries=len(entries),
        rate_groups=document.rate_group_count(),
        skipped_rows=skipped,
    )
    log.info(f"Processed {summary.entries} in-network entries")
    log.info(f"Total negotiated rates: {summary.rate_groups}")
    return document, summary


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    *,
    encoding: Optional[str] = None,
    validate: bool = True,
    log: Optional[logging.Logger] = None,
) -> Tuple[ConversionSummary, Optional[ValidationResult]]:
    """
    Read ``input_path``, convert it and write the JSON document to ``output_path``.

    The document is built and (optionally) schema checked before anything is
    written. Raises FormatError, SchemaValidationError or OSError.
    """
    log = log or logger

    data = Path(input_path).read_bytes()
    kind = sniff_kind_from_bytes(data)
    if kind in ("json", "xml"):
        raise FormatError(f"{input_path} looks like {kind.upper()}, expected a CSV export")

    rows = read_rows(data, encoding=encoding)
    log.debug(f"Read {len(rows)} rows from {input_path}")
    document, summary = convert_rows(rows, log=log)

    validation = None
    if validate:
        validation = validate_document(document.to_dict())
        if not validation.ok:
            raise SchemaValidationError(validation)

    summary.output_path = str(write_document(document, output_path))
    log.info(f"JSON file created: {summary.output_path}")
    return summary, validation
