"""
Configuration for the constructor formatter.
"""

from freezed_go_style.user_config import DEFAULT_CONFIG

FORMATTER_CONFIG = {
    "marker_name": DEFAULT_CONFIG["formatter"]["marker_name"],
    "indent_unit": DEFAULT_CONFIG["formatter"]["indent_unit"],
    "language": "dart",
    "encoding": "utf-8",
}
