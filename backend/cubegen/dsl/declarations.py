"""
Declaration parser.

Handles ``node`` and ``container`` statements:

    node api: "API Server" icon=Api x=500 y=200
    container vpc: "VPC" w=600 h=400 {

Attribute keys outside the recognized set are accepted and ignored so that
newer documents still load in older builds. That permissiveness is
intentional.
"""

import math
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from cubegen.dsl.tokenizer import (
    BLOCK_OPEN,
    ClassifiedLine,
    is_identifier,
    read_quoted,
)
from cubegen.ir.errors import ParseError


NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)\Z")

# attribute key -> Declaration field
NUMERIC_ATTRIBUTES = {
    "x": "x",
    "y": "y",
    "w": "width",
    "width": "width",
    "h": "height",
    "height": "height",
}


@dataclass
class Declaration:
    kind: str                       # node | container
    id: str
    label: str
    line: int
    icon: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    parent: Optional[str] = None
    opens_block: bool = False

    @property
    def is_container(self) -> bool:
        return self.kind == "container"


class _Rejected(Exception):
    """Internal signal: the statement is malformed and must be dropped."""


def opens_block(text: str) -> bool:
    """True when the statement ends with a ``{`` outside any quoted string."""
    return _split_block_open(text)[1]


def _split_block_open(text: str) -> Tuple[str, bool]:
    # returns (text without the trailing brace, whether one was there)
    stripped = text.rstrip()
    if stripped.endswith(BLOCK_OPEN) and stripped[:-1].count('"') % 2 == 0:
        return stripped[:-1], True
    return text, False


def parse_declaration(
    line: ClassifiedLine,
) -> Tuple[Optional[Declaration], Optional[ParseError]]:
    """
    Parse one declaration line.

    Returns ``(declaration, None)`` on success or ``(None, error)`` when the
    line is malformed. Duplicate identifiers are not checked here.
    """
    try:
        return _parse(line), None
    except _Rejected as e:
        return None, ParseError(line=line.number, message=str(e))


def _parse(line: ClassifiedLine) -> Declaration:
    parts = line.text.split(None, 1)
    keyword = parts[0]
    rest = parts[1].strip() if len(parts) > 1 else ""

    # identifier runs up to the first ':' (or a stray quote)
    stop = len(rest)
    for i, ch in enumerate(rest):
        if ch in ':"':
            stop = i
            break

    identifier = rest[:stop].strip()
    if not identifier:
        raise _Rejected(f"Missing identifier after '{keyword}'")
    if not is_identifier(identifier):
        raise _Rejected(
            f"Invalid identifier '{identifier}': use letters, digits, '_' or '-' "
            f"and no spaces"
        )
    if stop == len(rest) or rest[stop] != ":":
        raise _Rejected(f"Missing ':' after identifier '{identifier}'")

    remainder = rest[stop + 1:].lstrip()
    if not remainder.startswith('"'):
        raise _Rejected(f"Missing quoted label for '{identifier}'")

    quoted = read_quoted(remainder, 0)
    if quoted is None:
        raise _Rejected(f"Unterminated string in label for '{identifier}'")
    label, end = quoted

    decl = Declaration(kind=keyword, id=identifier, label=label, line=line.number)

    tail, has_block = _split_block_open(remainder[end:])
    if has_block:
        if not decl.is_container:
            raise _Rejected(
                f"Only containers can open a '{BLOCK_OPEN}' block ('{identifier}' is a node)"
            )
        decl.opens_block = True

    _apply_attributes(decl, tail.split())
    return decl


def _apply_attributes(decl: Declaration, tokens: List[str]) -> None:
    # repeated keys: last one wins
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise _Rejected(f"Malformed attribute '{token}' on '{decl.id}': expected key=value")
        if '"' in value:
            raise _Rejected(
                f"Attribute '{key}' on '{decl.id}' must be a bare value, not a quoted string"
            )

        if key in NUMERIC_ATTRIBUTES:
            if not value:
                continue
            # long digit strings pass the pattern but overflow to inf
            if not NUMBER_RE.match(value) or not math.isfinite(float(value)):
                raise _Rejected(
                    f"Attribute '{key}' on '{decl.id}' must be a number, got '{_snippet(value)}'"
                )
            setattr(decl, NUMERIC_ATTRIBUTES[key], float(value))

        elif key == "icon":
            # containers carry no icon
            if not decl.is_container:
                decl.icon = value or None

        elif key == "parent":
            if value and not is_identifier(value):
                raise _Rejected(f"Invalid parent identifier '{value}' on '{decl.id}'")
            decl.parent = value or None

        # unknown keys: accepted and ignored


def _snippet(value: str, limit: int = 40) -> str:
    return value if len(value) <= limit else value[:limit - 3] + "..."
