"""
CubeGen DSL parser.

Turns a complete DSL source string into a DiagramDocument, or into the full
list of problems found in it. Parsing is two-phase:

    1. Scanning   -> classify and parse every line, collecting diagnostics
    2. Resolving  -> check link endpoints and parents against declared ids

The parser never stops at the first problem and never raises for malformed
input. Errors are returned sorted by line number.

Example:

    result = parse_dsl('node a: "Alice"\\nnode b: "Bob"\\na -> b: "calls"')
    if result.success:
        render(result.document)
    else:
        for err in result.errors:
            print(f"Line {err.line}: {err.message}")
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from cubegen.config import DEFAULT_TITLE
from cubegen.dsl.declarations import Declaration, opens_block, parse_declaration
from cubegen.dsl.links import LinkStatement, parse_link
from cubegen.dsl.resolver import resolve_links, resolve_parents
from cubegen.dsl.tokenizer import (
    BLOCK_CLOSE,
    BLOCK_OPEN,
    TITLE_KEYWORD,
    ClassifiedLine,
    LineKind,
    classify_lines,
    read_quoted,
)
from cubegen.ir.diagram import ContainerRecord, DiagramDocument, NodeRecord
from cubegen.ir.errors import ParseError
from cubegen.ir.result import ParseResult

logger = logging.getLogger(__name__)

_SNIPPET_LEN = 40


class ParsePhase(Enum):
    SCANNING = "scanning"
    RESOLVING = "resolving"
    DONE = "done"


class DocumentScanner:
    """
    Per-call parser state. One instance handles exactly one source string.

    Usage:
        scanner = DocumentScanner()
        for line in classify_lines(source):
            scanner.feed(line)
        result = scanner.finish()
    """

    def __init__(self):
        self.phase = ParsePhase.SCANNING
        self.declarations: List[Declaration] = []
        self.links: List[LinkStatement] = []
        self.errors: List[ParseError] = []
        self.title: Optional[str] = None
        self.title_line: Optional[int] = None
        self.line_count = 0

        self._by_id: Dict[str, Declaration] = {}
        # open blocks: (container id or None when its declaration failed, opening line)
        self._blocks: List[Tuple[Optional[str], int]] = []

    # -------------------------
    # Scanning
    # -------------------------

    def feed(self, line: ClassifiedLine) -> None:
        if self.phase is not ParsePhase.SCANNING:
            raise RuntimeError("DocumentScanner already finished")

        self.line_count = line.number

        if line.kind in (LineKind.COMMENT, LineKind.BLANK):
            return
        if line.kind is LineKind.DECLARATION:
            self._scan_declaration(line)
        elif line.kind is LineKind.LINK:
            self._scan_link(line)
        elif line.kind is LineKind.TITLE:
            self._scan_title(line)
        elif line.kind is LineKind.BLOCK_END:
            self._scan_block_end(line)
        else:
            self._error(line.number, f"Unrecognized statement: '{_snippet(line.text)}'")

    def _scan_declaration(self, line: ClassifiedLine) -> None:
        decl, error = parse_declaration(line)

        if error is not None:
            self.errors.append(error)
            if opens_block(line.text):
                # keep braces balanced even though the container is dropped
                self._blocks.append((None, line.number))
            return

        first = self._by_id.get(decl.id)
        if first is not None:
            self._error(
                line.number,
                f"Duplicate identifier '{decl.id}' (first declared on line {first.line})",
            )
            if decl.opens_block:
                self._blocks.append((None, line.number))
            return

        if decl.parent is None:
            decl.parent = self._enclosing_container()

        self._by_id[decl.id] = decl
        self.declarations.append(decl)

        if decl.opens_block:
            self._blocks.append((decl.id, line.number))

    def _scan_link(self, line: ClassifiedLine) -> None:
        link, error = parse_link(line)
        if error is not None:
            self.errors.append(error)
        else:
            self.links.append(link)

    def _scan_title(self, line: ClassifiedLine) -> None:
        rest = line.text[len(TITLE_KEYWORD):].lstrip()
        if rest.startswith(":"):
            rest = rest[1:].lstrip()

        if not rest.startswith('"'):
            self._error(line.number, "Missing quoted text after 'title'")
            return
        quoted = read_quoted(rest, 0)
        if quoted is None:
            self._error(line.number, "Unterminated string in title")
            return
        text, end = quoted
        if rest[end:].strip():
            self._error(line.number, f"Unexpected text after title: '{_snippet(rest[end:].strip())}'")
            return

        if self.title_line is not None:
            self._error(line.number, f"Title already set on line {self.title_line}")
            return
        self.title = text
        self.title_line = line.number

    def _scan_block_end(self, line: ClassifiedLine) -> None:
        if not self._blocks:
            self._error(line.number, f"Unmatched '{BLOCK_CLOSE}'")
            return
        self._blocks.pop()

    def _enclosing_container(self) -> Optional[str]:
        for container_id, _ in reversed(self._blocks):
            if container_id is not None:
                return container_id
        return None

    def _error(self, line: int, message: str) -> None:
        self.errors.append(ParseError(line=line, message=message))

    # -------------------------
    # Resolving
    # -------------------------

    def finish(self) -> ParseResult:
        self.phase = ParsePhase.RESOLVING

        for container_id, opened_on in self._blocks:
            if container_id is None:
                self._error(opened_on, f"Unclosed '{BLOCK_OPEN}' block")
            else:
                self._error(opened_on, f"Unclosed '{BLOCK_OPEN}' block for container '{container_id}'")
        self._blocks.clear()

        links, link_errors = resolve_links(self.links, set(self._by_id))
        self.errors.extend(link_errors)
        self.errors.extend(resolve_parents(self.declarations))

        self.phase = ParsePhase.DONE

        # stable: problems on the same line keep detection order
        errors = sorted(self.errors, key=lambda e: e.line)

        logger.debug(
            "Parsed %d lines: %d declarations, %d links, %d errors",
            self.line_count, len(self.declarations), len(self.links), len(errors),
        )

        if errors:
            return ParseResult.failure(errors)

        return ParseResult.ok(DiagramDocument(
            title=self.title if self.title is not None else DEFAULT_TITLE,
            nodes=[_to_node(d) for d in self.declarations if not d.is_container],
            containers=[_to_container(d) for d in self.declarations if d.is_container],
            links=links,
        ))


def parse_dsl(source: str) -> ParseResult:
    """Parse a complete DSL document. Pure: no state survives the call."""
    scanner = DocumentScanner()
    for line in classify_lines(source):
        scanner.feed(line)
    return scanner.finish()


def _to_node(decl: Declaration) -> NodeRecord:
    return NodeRecord(
        id=decl.id,
        label=decl.label,
        icon=decl.icon,
        x=decl.x,
        y=decl.y,
        width=decl.width,
        height=decl.height,
        parent=decl.parent,
    )


def _to_container(decl: Declaration) -> ContainerRecord:
    return ContainerRecord(
        id=decl.id,
        label=decl.label,
        x=decl.x,
        y=decl.y,
        width=decl.width,
        height=decl.height,
        parent=decl.parent,
    )


def _snippet(text: str) -> str:
    if len(text) <= _SNIPPET_LEN:
        return text
    return text[:_SNIPPET_LEN - 3] + "..."
