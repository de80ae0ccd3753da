"""
TiC Converter - hospital pricing-transparency CSV to In-Network Rates JSON

Reshapes a fixed-layout hospital pricing export (metadata row, header row,
one column per payer plan) into the CMS Transparency-in-Coverage
In-Network Rates document.
"""

__version__ = "0.1.0"
__author__ = "TiC Converter"
__email__ = "dev@tic-converter.example"

from .types import (
    ConversionError,
    FormatError,
    SchemaValidationError,
    OutputDocument,
    ConversionSummary,
)
from .converter import convert_rows, convert_file

__all__ = [
    "ConversionError",
    "FormatError",
    "SchemaValidationError",
    "OutputDocument",
    "ConversionSummary",
    "convert_rows",
    "convert_file",
]
