from __future__ import annotations
from typing import List, Optional
import csv, io

from .layout import LAYOUT
from .types import FormatError

RawTable = List[List[str]]

def read_rows(data: bytes, encoding: Optional[str] = None) -> RawTable:
    """
    Decode ``data`` and split it into rows of raw string fields.

    Rows keep whatever field count they have and fields are not trimmed.
    Blank lines come back as empty rows so row indices line up with the
    spreadsheet the export was saved from.
    """
    encoding = encoding or LAYOUT["encoding"]
    try:
        text = data.decode(encoding)
        return [row for row in csv.reader(io.StringIO(text, newline=""))]
    except UnicodeDecodeError as e:
        raise FormatError(f"Input is not valid {encoding}: {e}") from e
    except LookupError as e:
        raise FormatError(f"Unknown encoding: {encoding}") from e
    except csv.Error as e:
        raise FormatError(f"Failed to tokenize CSV: {e}") from e
