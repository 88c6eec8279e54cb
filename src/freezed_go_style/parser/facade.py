from pathlib import Path
from typing import Optional

from tree_sitter import Tree

from freezed_go_style.exceptions import ParseFailure
from freezed_go_style.logging_config import logger
from .config import SUPPORTED_LANGUAGES
from .language_manager import get_parser


def language_for(file_path: Path) -> Optional[str]:
    """Language name for a file extension, or None when unsupported."""
    return SUPPORTED_LANGUAGES.get(file_path.suffix.lower())


def parse_source(data: bytes, file_path: str = "<memory>", language: str = "dart") -> Tree:
    """
    Parses a source buffer into a tree-sitter tree.

    A tree containing error nodes is still returned; callers decide which
    subtrees they trust.

    Raises:
        ParseFailure: If the parser produces no usable tree
        GrammarNotFoundError: If the grammar cannot be loaded
    """
    parser = get_parser(language)

    try:
        tree = parser.parse(data)
    except (ValueError, TypeError) as e:
        raise ParseFailure(file_path, str(e)) from e

    if tree is None or tree.root_node is None:
        raise ParseFailure(file_path, "parser returned no tree")

    root = tree.root_node
    if root.type == "ERROR":
        raise ParseFailure(file_path, "the whole file is a syntax error")

    if root.has_error:
        logger.debug(f"{file_path}: parsed with syntax errors, affected declarations will be skipped")

    return tree
