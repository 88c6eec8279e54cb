"""
freezed-go-style - Go-style alignment for Freezed constructors

Realigns the parameter block of the primary factory constructor of every
Dart class marked with @FreezedGoStyle, leaving the rest of the file intact.
"""

__version__ = "0.1.0"

from freezed_go_style.formatter import DartFormatter, format_source
from freezed_go_style.schemas import (
    Parameter,
    ColumnWidths,
    ReplacementSpan,
    FileResult,
    FormatSummary,
)

__all__ = [
    "__version__",
    "DartFormatter",
    "format_source",
    "Parameter",
    "ColumnWidths",
    "ReplacementSpan",
    "FileResult",
    "FormatSummary",
]
