from typing import Dict

from tree_sitter import Parser

from freezed_go_style.exceptions import GrammarNotFoundError
from freezed_go_style.logging_config import logger

# Global cache for loaded parsers to avoid repeated grammar loading
_parser_cache: Dict[str, Parser] = {}


def get_parser(language_name: str) -> Parser:
    """
    Loads a tree-sitter parser for a language from tree-sitter-language-pack.

    Caches the parser object for efficiency.

    Raises:
        GrammarNotFoundError: If the grammar package or language is unavailable
    """
    if language_name in _parser_cache:
        return _parser_cache[language_name]

    try:
        from tree_sitter_language_pack import get_parser as load_parser
    except ImportError as e:
        logger.error(f"tree-sitter-language-pack is not installed: {e}")
        raise GrammarNotFoundError(language_name) from e

    try:
        parser = load_parser(language_name)
    except (LookupError, ValueError, OSError) as e:
        logger.error(f"Failed to load language '{language_name}'. Error: {e}")
        raise GrammarNotFoundError(language_name) from e

    _parser_cache[language_name] = parser
    logger.debug(f"Successfully loaded language '{language_name}'")
    return parser
