"""
ParameterExtractor: turn a constructor's parameter list into Parameter records.

The list is split on its top-level commas. For every parameter the
annotations are kept verbatim, the name is the last identifier outside
annotations, and whatever sits between the annotations and the name is the
declared type (with a leading "required" turned into the required flag).

Comments are "lifted and shifted": each comment is attached to the
parameter whose region holds it and is later rendered on its own line above
that parameter. A region runs from just after the previous separator up to
and including the parameter's own separator; a comment sharing a line with
a separator belongs to the parameter that separator closes.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tree_sitter import Node

from freezed_go_style.exceptions import ExtractionFailure
from freezed_go_style.logging_config import logger
from freezed_go_style.parser.nodes import annotations_in, comments_in, is_annotation, is_comment, is_kind, walk
from freezed_go_style.schemas import ListStyle, Offset, Parameter
from .buffer import SourceBuffer
from .selector import ConstructorSite

REQUIRED_PREFIX = re.compile(r"^required\b\s*")
FIELD_FORWARDING = re.compile(r"\b(?:this|super)\s*\.\s*$")

OPENERS = {"{": ListStyle.NAMED, "[": ListStyle.OPTIONAL_POSITIONAL}
CLOSERS = {"{": "}", "[": "]"}
DEFAULT_VALUE_TOKENS = ("=", ":")
UNTYPED = "dynamic"


@dataclass
class ParameterList:
    style: ListStyle
    parameters: List[Parameter] = field(default_factory=list)


@dataclass
class _Group:
    """Nodes of one comma-separated slot and the offset where its separator ends."""
    nodes: List[Node]
    boundary: Offset


def _list_content(site: ConstructorSite) -> Tuple[ListStyle, List[Node]]:
    params_node = site.params_node
    children = [c for c in params_node.children if not is_comment(c)]
    if len(children) < 2 or children[0].type != "(" or children[-1].type != ")":
        raise ExtractionFailure(site.label, "parameter list is not parenthesized")

    inner = children[1:-1]
    optional = [c for c in inner if is_kind(c, "optional_parameters")]
    if optional:
        if len(inner) != 1:
            raise ExtractionFailure(site.label, "mixed positional and optional parameters")
        inner = [c for c in optional[0].children if not is_comment(c)]

    style = ListStyle.POSITIONAL
    if inner and inner[0].type in OPENERS:
        opener = inner[0].type
        if inner[-1].type != CLOSERS[opener]:
            raise ExtractionFailure(site.label, f"unterminated '{opener}' parameter group")
        style = OPENERS[opener]
        inner = inner[1:-1]

    if any(c.type in ("{", "}", "[", "]") for c in inner):
        raise ExtractionFailure(site.label, "mixed positional and optional parameters")

    return style, inner


def _split_groups(inner: List[Node]) -> List[_Group]:
    groups = []
    current: List[Node] = []
    for child in inner:
        if child.type == ",":
            if current:
                groups.append(_Group(current, Offset(child.end_byte)))
            current = []
        else:
            current.append(child)
    if current:
        groups.append(_Group(current, Offset(current[-1].end_byte)))
    return groups


def _strip_ranges(buffer: SourceBuffer, start: int, end: int, ranges: List[Tuple[int, int]]) -> str:
    """Text of [start, end) with each excluded range replaced by one space."""
    pieces = []
    cursor = start
    for r_start, r_end in sorted(ranges):
        if r_end <= cursor or r_start >= end:
            continue
        pieces.append(buffer.text(cursor, max(cursor, r_start)))
        pieces.append(" ")
        cursor = max(cursor, r_end)
    pieces.append(buffer.text(cursor, end))
    return "".join(pieces)


def _parse_group(group: _Group, comments: List[Node], buffer: SourceBuffer, label: str) -> Optional[Parameter]:
    nodes = group.nodes
    start, end = nodes[0].start_byte, nodes[-1].end_byte

    tokens = [n for root in nodes for n in walk(root, prune=is_annotation)]
    if any(n.type in DEFAULT_VALUE_TOKENS for n in tokens):
        raise ExtractionFailure(label, "default values are not supported in a redirecting factory")

    annotations = annotations_in(nodes)
    # Comments between the nodes of a group are siblings in the list, not part of the group
    comment_ranges = [(c.start_byte, c.end_byte) for c in comments if start <= c.start_byte < end]
    identifiers = [n for n in tokens if is_kind(n, "identifier") and n.start_byte >= start]
    if not identifiers:
        return None
    name_node = max(identifiers, key=lambda n: n.start_byte)
    name = buffer.text(name_node.start_byte, name_node.end_byte).strip()
    if not name:
        return None

    trailing = _strip_ranges(buffer, name_node.end_byte, end, comment_ranges).strip()
    if trailing:
        raise ExtractionFailure(label, f"unexpected '{trailing}' after parameter '{name}'")

    excluded = comment_ranges + [(a.start_byte, a.end_byte) for a in annotations]
    prefix = " ".join(_strip_ranges(buffer, start, name_node.start_byte, excluded).split())

    required = False
    match = REQUIRED_PREFIX.match(prefix)
    if match:
        required = True
        prefix = prefix[match.end():]
    prefix = FIELD_FORWARDING.sub("", prefix).strip()

    type_text = prefix or UNTYPED
    if required:
        type_text = f"required {type_text}"

    return Parameter(
        decorators=[buffer.text(a.start_byte, a.end_byte) for a in annotations],
        type_text=type_text,
        name=name,
        required=required,
    )


def _comment_owner(comment_start: int, groups: List[_Group], buffer: SourceBuffer) -> int:
    for index, group in enumerate(groups):
        if comment_start < group.boundary:
            return index
        if not buffer.has_newline_between(group.boundary, Offset(comment_start)):
            return index
    return len(groups) - 1


def extract_parameters(site: ConstructorSite, buffer: SourceBuffer) -> ParameterList:
    """
    Extract the ordered parameters of a primary constructor.

    Raises:
        ExtractionFailure: If the list has a shape that cannot be realigned
    """
    if site.params_node.has_error:
        raise ExtractionFailure(site.label, "parameter list contains syntax errors")

    style, inner = _list_content(site)
    groups = _split_groups(inner)
    if not groups:
        return ParameterList(style)

    comment_nodes = comments_in(site.params_node)
    slots = [_parse_group(group, comment_nodes, buffer, site.label) for group in groups]

    comments: List[List[str]] = [[] for _ in groups]
    for comment in comment_nodes:
        owner = _comment_owner(comment.start_byte, groups, buffer)
        comments[owner].append(buffer.text(comment.start_byte, comment.end_byte).rstrip())

    parameters = []
    carried: List[str] = []
    for index, slot in enumerate(slots):
        if slot is None:
            logger.warning(f"{site.label}: dropping parameter #{index + 1} with no name")
            carried.extend(comments[index])
            continue
        slot.comments = carried + comments[index]
        carried = []
        parameters.append(slot)
    if carried and parameters:
        parameters[-1].comments.extend(carried)

    return ParameterList(style, parameters)
