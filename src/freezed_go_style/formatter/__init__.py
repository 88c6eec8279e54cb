"""
Formatter package: the extraction, alignment and patching pipeline.
"""

from .facade import DartFormatter, CompilationUnitFormatter, UnitOutcome, format_source
from .buffer import SourceBuffer
from .marker import annotation_identifier, has_marker
from .columns import compute_column_widths
from .renderer import render_constructor, render_parameter_line
from .patcher import apply_spans, compose_spans
from .config import FORMATTER_CONFIG

__all__ = [
    "DartFormatter",
    "CompilationUnitFormatter",
    "UnitOutcome",
    "format_source",
    "SourceBuffer",
    "annotation_identifier",
    "has_marker",
    "compute_column_widths",
    "render_constructor",
    "render_parameter_line",
    "apply_spans",
    "compose_spans",
    "FORMATTER_CONFIG",
]
