"""
Link parser.

    api -> db: "Query"
    svc <-> cache

Links are accepted here without checking that their endpoints exist;
forward references are legal and endpoints are checked by the resolver
once the whole document has been scanned.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from cubegen.dsl.tokenizer import (
    TWO_WAY_ARROW,
    ClassifiedLine,
    find_arrow,
    find_outside_quotes,
    is_identifier,
    read_quoted,
)
from cubegen.ir.errors import ParseError


@dataclass
class LinkStatement:
    source: str
    target: str
    line: int
    bidirectional: bool = False
    label: Optional[str] = None


def parse_link(
    line: ClassifiedLine,
) -> Tuple[Optional[LinkStatement], Optional[ParseError]]:
    text = line.text

    def reject(message: str):
        return None, ParseError(line=line.number, message=message)

    found = find_arrow(text)
    if found is None:
        return reject("Missing link operator '->' or '<->'")
    index, arrow = found

    source = text[:index].strip()
    if not source:
        return reject(f"Missing source identifier before '{arrow}'")
    if not is_identifier(source):
        return reject(f"Invalid source identifier '{source}'")

    rest = text[index + len(arrow):].strip()
    colon = find_outside_quotes(rest, ":")
    target = (rest if colon < 0 else rest[:colon]).strip()
    if not target:
        return reject(f"Missing target identifier after '{arrow}'")
    if not is_identifier(target):
        return reject(f"Invalid target identifier '{target}'")

    label = None
    if colon >= 0:
        after = rest[colon + 1:].lstrip()
        if not after:
            return reject(f"Missing label after ':' in link '{source} {arrow} {target}'")
        if not after.startswith('"'):
            return reject(f"Link label must be a quoted string in '{source} {arrow} {target}'")

        quoted = read_quoted(after, 0)
        if quoted is None:
            return reject(f"Unterminated string in label of link '{source} {arrow} {target}'")
        label, end = quoted

        trailing = after[end:].strip()
        if trailing:
            return reject(f"Unexpected text after link label: '{trailing}'")

    return (
        LinkStatement(
            source=source,
            target=target,
            line=line.number,
            bidirectional=arrow == TWO_WAY_ARROW,
            label=label,
        ),
        None,
    )
