"""
Line classifier for the CubeGen DSL.

Splits source text into physical lines and tags each one with the kind of
statement it holds. Line numbers always refer to the original text, so
comments and blank lines keep their slots even though the parser skips them.

Also hosts the small lexical helpers shared by the statement parsers.
Every helper is a single left-to-right scan; none of them backtracks.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_\-]*\Z")

DECLARATION_KEYWORDS = ("node", "container")
TITLE_KEYWORD = "title"
COMMENT_PREFIX = "//"
BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"

ONE_WAY_ARROW = "->"
TWO_WAY_ARROW = "<->"


class LineKind(Enum):
    DECLARATION = "declaration"
    LINK = "link"
    TITLE = "title"
    BLOCK_END = "block_end"
    COMMENT = "comment"
    BLANK = "blank"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ClassifiedLine:
    number: int     # 1-based, against the original source
    text: str       # trimmed
    kind: LineKind


# -------------------------
# Lexical helpers
# -------------------------

def is_identifier(token: str) -> bool:
    return bool(IDENTIFIER_RE.match(token))


def first_token(text: str) -> str:
    parts = text.split(None, 1)
    return parts[0] if parts else ""


def find_outside_quotes(text: str, needle: str, start: int = 0) -> int:
    """Index of the first *needle* not inside a double-quoted string, or -1."""
    in_quotes = False
    i = start
    while i < len(text):
        ch = text[i]
        if ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes and text.startswith(needle, i):
            return i
        i += 1
    return -1


def find_arrow(text: str) -> Optional[Tuple[int, str]]:
    """
    Locate the first link operator outside quotes.

    The three-character ``<->`` is tried before ``->`` at every position,
    so a bidirectional arrow is never read as ``<`` followed by ``->``.
    Returns ``(index, operator)`` or ``None``.
    """
    in_quotes = False
    for i, ch in enumerate(text):
        if ch == '"':
            in_quotes = not in_quotes
            continue
        if in_quotes:
            continue
        if text.startswith(TWO_WAY_ARROW, i):
            return i, TWO_WAY_ARROW
        if text.startswith(ONE_WAY_ARROW, i):
            return i, ONE_WAY_ARROW
    return None


def read_quoted(text: str, start: int) -> Optional[Tuple[str, int]]:
    """
    Read a ``"..."`` string whose opening quote sits at *start*.

    Returns ``(content, index_after_closing_quote)``, or ``None`` when the
    string is unterminated. There is no escaping inside strings.
    """
    end = text.find('"', start + 1)
    if end < 0:
        return None
    return text[start + 1:end], end + 1


# -------------------------
# Classification
# -------------------------

def classify_line(number: int, raw: str) -> ClassifiedLine:
    text = raw.strip()

    if not text:
        return ClassifiedLine(number, text, LineKind.BLANK)
    if text.startswith(COMMENT_PREFIX):
        return ClassifiedLine(number, text, LineKind.COMMENT)

    head = first_token(text)
    if head in DECLARATION_KEYWORDS:
        kind = LineKind.DECLARATION
    elif find_arrow(text) is not None:
        kind = LineKind.LINK
    elif head == TITLE_KEYWORD or head.startswith(TITLE_KEYWORD + ":"):
        kind = LineKind.TITLE
    elif text == BLOCK_CLOSE:
        kind = LineKind.BLOCK_END
    else:
        kind = LineKind.UNKNOWN

    return ClassifiedLine(number, text, kind)


def classify_lines(source: str) -> Iterator[ClassifiedLine]:
    """
    Lazily classify every physical line of *source*.

    Lines are split on ``\\n`` only (a trailing ``\\r`` is dropped), matching
    the editor's own numbering. The generator is single-use.
    """
    for index, raw in enumerate(source.split("\n"), start=1):
        if raw.endswith("\r"):
            raw = raw[:-1]
        yield classify_line(index, raw)
