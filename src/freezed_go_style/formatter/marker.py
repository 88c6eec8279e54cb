"""
Marker detection for class declarations.
"""

import re
from typing import Iterable, List

from tree_sitter import Node

from freezed_go_style.parser.nodes import is_annotation, is_comment
from .buffer import SourceBuffer

# "@name", "@prefix.name" and "@name(...)": group 1 is the dotted identifier
ANNOTATION_NAME = re.compile(r"@\s*([A-Za-z_$][\w$]*(?:\s*\.\s*[A-Za-z_$][\w$]*)*)")


def annotation_identifier(annotation_text: str) -> str:
    """Identifier of an annotation with arguments dropped, e.g. '@JsonKey(...)' -> 'JsonKey'."""
    match = ANNOTATION_NAME.match(annotation_text.strip())
    if not match:
        return ""
    return re.sub(r"\s+", "", match.group(1))


def has_marker(annotations: Iterable[str], marker_name: str) -> bool:
    """True iff one annotation's identifier is exactly marker_name."""
    return any(annotation_identifier(text) == marker_name for text in annotations)


def class_annotations(class_node: Node, buffer: SourceBuffer) -> List[str]:
    """
    Source text of the annotations attached to a class declaration.

    Depending on the grammar revision the metadata is either part of the
    class node or a run of sibling nodes right before it; both are collected.
    """
    found = [child for child in class_node.children if is_annotation(child)]

    sibling = class_node.prev_sibling
    while sibling is not None and (is_annotation(sibling) or is_comment(sibling)):
        if is_annotation(sibling):
            found.append(sibling)
        sibling = sibling.prev_sibling

    found.sort(key=lambda n: n.start_byte)
    return [buffer.text(n.start_byte, n.end_byte) for n in found]
