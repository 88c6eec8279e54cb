"""
Small helpers for walking tree-sitter nodes of the Dart grammar.
"""

from typing import Callable, Iterator, List, Optional

from tree_sitter import Node

from .config import ANNOTATION_SUFFIX, COMMENT_SUFFIX, DART_NODE_TYPES


def is_kind(node: Node, kind: str) -> bool:
    return node.type in DART_NODE_TYPES[kind]


def is_annotation(node: Node) -> bool:
    return node.is_named and node.type.endswith(ANNOTATION_SUFFIX)


def is_comment(node: Node) -> bool:
    return node.type.endswith(COMMENT_SUFFIX)


def walk(node: Node, prune: Optional[Callable[[Node], bool]] = None) -> Iterator[Node]:
    """
    Pre-order walk over node and its descendants.

    Children of nodes for which prune() returns True are not visited,
    but the pruned node itself is yielded.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if prune is not None and prune(current):
            continue
        stack.extend(reversed(current.children))


def find_first(node: Node, kind: str, prune: Optional[Callable[[Node], bool]] = None) -> Optional[Node]:
    """Return the first descendant (document order) of the given kind."""
    for current in walk(node, prune):
        if current is not node and is_kind(current, kind):
            return current
    return None


def annotations_in(nodes: List[Node]) -> List[Node]:
    """Annotation nodes among nodes and their descendants, not nested in another annotation."""
    found = []
    for root in nodes:
        for current in walk(root, prune=is_annotation):
            if is_annotation(current):
                found.append(current)
    return sorted(found, key=lambda n: n.start_byte)


def comments_in(node: Node) -> List[Node]:
    """Comment nodes inside node, skipping comments embedded in annotations."""
    found = []
    for current in walk(node, prune=is_annotation):
        if is_comment(current) and not is_annotation(current):
            found.append(current)
    return sorted(found, key=lambda n: n.start_byte)
