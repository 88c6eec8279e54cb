"""
ConstructorSelector: find the factory constructors of a marked class.

Members of the class body are tagged with a closed MemberKind and only
CONSTRUCTOR members are looked at further. Among redirecting factories,
the unnamed one (or the one named after the class) is PRIMARY; every
other named factory (fromJson, union cases, ...) is SPECIAL and kept as is.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from tree_sitter import Node

from freezed_go_style.logging_config import logger
from freezed_go_style.parser.nodes import find_first, is_annotation, is_comment, is_kind, walk
from freezed_go_style.schemas import Offset
from .buffer import SourceBuffer

IDENT = r"[A-Za-z_$][\w$]*"
FACTORY_HEAD = re.compile(rf"^(?:external\s+)?(?:const\s+)?factory\s+({IDENT})(?:\s*\.\s*({IDENT}))?$")
GENERATIVE_HEAD = re.compile(rf"^(?:external\s+)?(?:const\s+)?({IDENT})(?:\s*\.\s*({IDENT}))?$")
CLASS_NAME = re.compile(rf"\bclass\s+({IDENT})")
# "= _Impl;" / "= _Impl<T>;" / "= prefix._Impl.named;"
REDIRECT_CLAUSE = re.compile(r"^\s*=(?!>)[^;{}()]*;$", re.DOTALL)
COMMENT = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)

BODY_PUNCTUATION = {"{", "}", ";"}


class MemberKind(Enum):
    """Closed set of class member shapes."""
    CONSTRUCTOR = "constructor"
    METHOD = "method"
    OTHER = "other"


class Eligibility(Enum):
    """What the formatter may do with a constructor."""
    PRIMARY = "primary"          # aligned
    SPECIAL = "special"          # named redirecting factory, kept verbatim
    PASSTHROUGH = "passthrough"  # not a redirecting factory, kept verbatim


@dataclass
class ConstructorSite:
    """
    Location and fixed text of one constructor declaration.

    start is the first token of the declaration and end is one past its
    terminating semicolon, when one was found.
    """
    node: Node
    class_name: str
    name: str
    head: str
    start: Offset
    params_node: Node
    is_factory: bool
    clause: Optional[str] = None
    end: Optional[Offset] = None

    @property
    def label(self) -> str:
        return f"{self.class_name}.{self.name}" if self.name else self.class_name

    @property
    def redirects(self) -> bool:
        if self.clause is None:
            return False
        # Comments may sit anywhere between ')' and ';'
        return bool(REDIRECT_CLAUSE.match(COMMENT.sub(" ", self.clause)))


@dataclass
class Member:
    kind: MemberKind
    node: Node
    site: Optional[ConstructorSite] = None


def class_name_of(class_node: Node, buffer: SourceBuffer) -> str:
    name_node = class_node.child_by_field_name("name")
    if name_node is not None:
        return buffer.text(name_node.start_byte, name_node.end_byte)
    match = CLASS_NAME.search(buffer.text(class_node.start_byte, class_node.end_byte))
    return match.group(1) if match else ""


def class_body_of(class_node: Node) -> Optional[Node]:
    body = class_node.child_by_field_name("body")
    if body is not None and is_kind(body, "class_body"):
        return body
    for child in class_node.children:
        if is_kind(child, "class_body"):
            return child
    return None


def _first_token_start(node: Node) -> Offset:
    """Start of the first leaf token of node that is not metadata or a comment."""
    for current in walk(node, prune=lambda n: is_annotation(n) or is_comment(n)):
        if is_annotation(current) or is_comment(current):
            continue
        if current.child_count == 0:
            return Offset(current.start_byte)
    return Offset(node.start_byte)


def _skip_nested_bodies(node: Node) -> bool:
    return is_annotation(node) or node.type in ("function_body", "block", "class_body")


def classify_member(node: Node, class_name: str, body_end: Offset, buffer: SourceBuffer) -> Member:
    """Tag one class body member and, for constructors, record its site."""
    params_node = find_first(node, "parameter_list", prune=_skip_nested_bodies)
    if params_node is None:
        return Member(MemberKind.OTHER, node)

    start = _first_token_start(node)
    if start >= params_node.start_byte:
        return Member(MemberKind.METHOD, node)
    head = buffer.text(start, params_node.start_byte).strip()
    flat_head = " ".join(head.split())

    factory = FACTORY_HEAD.match(flat_head)
    generative = GENERATIVE_HEAD.match(flat_head)
    if factory:
        type_name, ctor_name = factory.group(1), factory.group(2) or ""
    elif generative and generative.group(1) == class_name:
        type_name, ctor_name = generative.group(1), generative.group(2) or ""
    else:
        return Member(MemberKind.METHOD, node)

    if type_name != class_name:
        return Member(MemberKind.METHOD, node)

    site = ConstructorSite(
        node=node,
        class_name=class_name,
        name=ctor_name,
        head=head,
        start=start,
        params_node=params_node,
        is_factory=bool(factory),
    )

    semicolon = buffer.find(b";", params_node.end_byte, body_end)
    if semicolon != -1:
        site.end = Offset(semicolon + 1)
        site.clause = buffer.text(params_node.end_byte, site.end)

    return Member(MemberKind.CONSTRUCTOR, node, site)


def iter_members(class_node: Node, class_name: str, buffer: SourceBuffer) -> List[Member]:
    body = class_body_of(class_node)
    if body is None:
        return []

    members = []
    for child in body.children:
        if not child.is_named or child.type in BODY_PUNCTUATION:
            continue
        if is_annotation(child) or is_comment(child):
            continue
        members.append(classify_member(child, class_name, Offset(body.end_byte), buffer))
    return members


def eligibility_of(site: ConstructorSite) -> Eligibility:
    if not (site.is_factory and site.redirects):
        return Eligibility.PASSTHROUGH
    if site.name == "" or site.name == site.class_name:
        return Eligibility.PRIMARY
    return Eligibility.SPECIAL


def select_constructors(class_node: Node, class_name: str, buffer: SourceBuffer) -> List[Tuple[ConstructorSite, Eligibility]]:
    """
    Constructors of a class in source order, each with its eligibility.
    """
    selected = []
    for member in iter_members(class_node, class_name, buffer):
        if member.kind is MemberKind.CONSTRUCTOR:
            eligibility = eligibility_of(member.site)
            logger.debug(
                f"Constructor {member.site.label}: factory={member.site.is_factory}, "
                f"redirects={member.site.redirects}, eligibility={eligibility.value}"
            )
            selected.append((member.site, eligibility))
        elif member.kind is MemberKind.METHOD:
            logger.debug(f"Skipping method member at byte {member.node.start_byte}")
        else:
            logger.debug(f"Skipping {member.node.type} member at byte {member.node.start_byte}")
    return selected
