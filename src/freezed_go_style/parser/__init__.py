"""
This facade exposes the public API for the parser module.
"""
from .facade import parse_source, language_for
from .language_manager import get_parser

__all__ = ["parse_source", "language_for", "get_parser"]
