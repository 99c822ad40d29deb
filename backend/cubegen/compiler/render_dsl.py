# backend/cubegen/compiler/render_dsl.py
"""
DSL Serializer

Writes a DiagramDocument back out as CubeGen DSL. Parsing the output gives
an equal document: containers and nodes keep their order, parents are
written as explicit ``parent=`` attributes, and links come last.
"""

from typing import List, Optional

from cubegen.config import DEFAULT_TITLE
from cubegen.dsl.tokenizer import is_identifier
from cubegen.ir.diagram import ContainerRecord, DiagramDocument, LinkRecord, NodeRecord


def render_dsl(document: DiagramDocument) -> str:
    """
    Render a document to DSL text.

    Raises:
        ValueError: if a label or identifier cannot be expressed in the DSL
            (strings have no escaping, so a label may not contain '"').
    """
    lines: List[str] = []

    if document.title != DEFAULT_TITLE:
        lines.append(f"title {_quote(document.title, 'title')}")
        lines.append("")

    for container in document.containers:
        lines.append(_render_declaration("container", container))

    for node in document.nodes:
        lines.append(_render_declaration("node", node, icon=node.icon))

    if document.links and (document.containers or document.nodes):
        lines.append("")

    for link in document.links:
        lines.append(_render_link(link))

    return "\n".join(lines) + "\n" if lines else ""


def format_number(value: float) -> str:
    """Shortest DSL-legal spelling: no exponent, no trailing '.0'."""
    if float(value).is_integer():
        return str(int(value))
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = f"{value:.15f}".rstrip("0").rstrip(".")
    return text


def _render_declaration(
    keyword: str,
    record: ContainerRecord,
    icon: Optional[str] = None,
) -> str:
    parts = [f"{keyword} {_identifier(record.id)}: {_quote(record.label, record.id)}"]

    if icon:
        parts.append(f"icon={_bare(icon, record.id)}")
    for key, value in (
        ("x", record.x),
        ("y", record.y),
        ("w", record.width),
        ("h", record.height),
    ):
        if value is not None:
            parts.append(f"{key}={format_number(value)}")
    if record.parent:
        parts.append(f"parent={_identifier(record.parent)}")

    return " ".join(parts)


def _render_link(link: LinkRecord) -> str:
    arrow = "<->" if link.bidirectional else "->"
    text = f"{_identifier(link.source)} {arrow} {_identifier(link.target)}"
    if link.label is not None:
        text += f": {_quote(link.label, link.id)}"
    return text


def _identifier(value: str) -> str:
    if not is_identifier(value):
        raise ValueError(f"'{value}' is not a valid DSL identifier")
    return value


def _quote(value: str, owner: str) -> str:
    if '"' in value or "\n" in value:
        raise ValueError(f"Text of '{owner}' cannot contain quotes or newlines in DSL output")
    return f'"{value}"'


def _bare(value: str, owner: str) -> str:
    if not value or any(ch.isspace() or ch == '"' for ch in value):
        raise ValueError(f"Attribute value '{value}' of '{owner}' must be a single bare token")
    return value
