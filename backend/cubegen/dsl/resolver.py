"""
Reference resolution, run once the whole document has been scanned.

Checks link endpoints and parent references against the declared
identifiers. Membership tests are order independent, which is what makes
forward references work.
"""

from typing import Dict, List, Sequence, Set, Tuple

from cubegen.dsl.declarations import Declaration
from cubegen.dsl.links import LinkStatement
from cubegen.ir.diagram import LinkRecord
from cubegen.ir.errors import ParseError


def resolve_links(
    links: Sequence[LinkStatement],
    known_ids: Set[str],
) -> Tuple[List[LinkRecord], List[ParseError]]:
    """
    Keep the links whose endpoints are both declared.

    Each unresolved endpoint produces its own error; the link is dropped.
    Surviving links get sequential ids in source order.
    """
    resolved: List[LinkRecord] = []
    errors: List[ParseError] = []

    for link in links:
        missing = [
            (end, ref)
            for end, ref in (("source", link.source), ("target", link.target))
            if ref not in known_ids
        ]
        for end, ref in missing:
            errors.append(ParseError(
                line=link.line,
                message=f"Unknown identifier '{ref}' in link {end}",
            ))
        if missing:
            continue

        resolved.append(LinkRecord(
            id=f"l{len(resolved) + 1}",
            source=link.source,
            target=link.target,
            bidirectional=link.bidirectional,
            label=link.label,
        ))

    return resolved, errors


def resolve_parents(declarations: Sequence[Declaration]) -> List[ParseError]:
    """Every parent must be a declared container, and containment must not loop."""
    errors: List[ParseError] = []
    containers: Dict[str, Declaration] = {d.id: d for d in declarations if d.is_container}
    node_ids = {d.id for d in declarations if not d.is_container}

    for decl in declarations:
        parent = decl.parent
        if parent is None:
            continue
        if parent == decl.id:
            errors.append(ParseError(decl.line, f"'{decl.id}' cannot be its own parent"))
        elif parent in node_ids:
            errors.append(ParseError(
                decl.line,
                f"Parent '{parent}' of '{decl.id}' is a node, not a container",
            ))
        elif parent not in containers:
            errors.append(ParseError(
                decl.line,
                f"Unknown parent container '{parent}' for '{decl.id}'",
            ))
        elif decl.is_container and _in_cycle(decl, containers):
            errors.append(ParseError(
                decl.line,
                f"Container '{decl.id}' is nested inside itself",
            ))

    return errors


def _in_cycle(start: Declaration, containers: Dict[str, Declaration]) -> bool:
    seen = {start.id}
    current = containers.get(start.parent)
    while current is not None and current.parent is not None:
        if current.parent == start.id:
            return True
        if current.parent in seen:
            # a loop that does not pass through start
            return False
        seen.add(current.id)
        current = containers.get(current.parent)
    return False
