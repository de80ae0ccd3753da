from __future__ import annotations
from typing import Literal, Sequence
import json
from .layout import LAYOUT

def sniff_kind_from_bytes(b: bytes) -> Literal["json","csv","xml","unknown"]:
    s = b.lstrip()
    if s[:1] in (b"{", b"["):
        # a bracketed title cell is still CSV; only a parseable document counts
        try:
            json.loads(s.decode("utf-8-sig"))
            return "json"
        except ValueError:
            pass
    elif s[:1] == b"<":
        first_line = s.splitlines()[0]
        if s.startswith(b"<?xml") or b"," not in first_line:
            return "xml"
    s = s[:256]
    # assume CSV if it has commas/quotes/newlines
    if b"," in s or b"\n" in s or b"\r" in s:
        return "csv"
    return "unknown"

def guess_billing_code_type(code: str) -> Literal["HCPCS","CPT"]:
    # first character only, case-sensitive
    return "HCPCS" if code[:1] in LAYOUT["hcpcs_prefixes"] else "CPT"

def guess_billing_class(setting: str) -> Literal["institutional","professional"]:
    return "institutional" if setting == LAYOUT["inpatient_setting"] else "professional"

def payer_name_from_header(header: str) -> str:
    sep = LAYOUT["payer_separator"]
    return header.split(sep, 1)[0] if sep in header else header

def is_repeated_header(row: Sequence[str]) -> bool:
    return bool(row) and row[0] == LAYOUT["header_sentinel"]
