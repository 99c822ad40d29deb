# backend/cubegen/compiler/render_d2.py
"""
D2 Diagram Renderer

D2 is a modern diagram language with:
- Better auto-layout algorithms
- Built-in icons and shapes
- Nested containers addressed by dotted paths (``vpc.api``)

Docs: https://d2lang.com/
"""

import re
from collections import defaultdict
from typing import Dict, List, Optional

from cubegen.icons.registry import GENERIC_ICON, IconRegistry, get_icon_registry
from cubegen.ir.diagram import DiagramDocument, NodeRecord

# D2 shapes for base icon tags; anything else renders as a rectangle
D2_SHAPE_MAP = {
    "User": "person",
    "Database": "cylinder",
    "Queue": "queue",
    "Cloud": "cloud",
    "Gateway": "hexagon",
    "Cache": "oval",
    "Storage": "stored_data",
}

_BARE_KEY_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


def render_d2(
    document: DiagramDocument,
    registry: Optional[IconRegistry] = None,
) -> str:
    """
    Render a DiagramDocument to D2 format.

    Args:
        document: A parsed diagram
        registry: Icon registry used to resolve icon tags (process-wide by default)

    Returns:
        D2 diagram source code
    """
    registry = registry or get_icon_registry()
    lines = ["direction: right", ""]

    if document.title:
        lines.append(f'title: "{_escape(document.title)}" {{ near: top-center; shape: text }}')
        lines.append("")

    container_ids = {c.id for c in document.containers}
    parents: Dict[str, Optional[str]] = {}
    for item in list(document.containers) + list(document.nodes):
        parents[item.id] = item.parent if item.parent in container_ids else None

    child_containers: Dict[Optional[str], List] = defaultdict(list)
    child_nodes: Dict[Optional[str], List[NodeRecord]] = defaultdict(list)
    for container in document.containers:
        child_containers[parents[container.id]].append(container)
    for node in document.nodes:
        child_nodes[parents[node.id]].append(node)

    def emit(parent: Optional[str], depth: int) -> None:
        indent = "  " * depth
        for container in child_containers.get(parent, []):
            lines.append(f'{indent}{_sanitize_id(container.id)}: "{_escape(container.label)}" {{')
            emit(container.id, depth + 1)
            lines.append(f"{indent}}}")
        for node in child_nodes.get(parent, []):
            lines.append(f"{indent}{_render_node(node, registry)}")

    emit(None, 0)
    lines.append("")

    # Render links with fully qualified paths
    for link in document.links:
        source = _path(link.source, parents)
        target = _path(link.target, parents)
        arrow = "<->" if link.bidirectional else "->"
        if link.label:
            lines.append(f'{source} {arrow} {target}: "{_escape(link.label)}"')
        else:
            lines.append(f"{source} {arrow} {target}")

    return "\n".join(lines)


def _sanitize_id(id_str: str) -> str:
    """Make ID safe for D2. Keys with anything but word characters are quoted."""
    if _BARE_KEY_RE.match(id_str):
        return id_str
    return f'"{_escape(id_str)}"'


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _path(item_id: str, parents: Dict[str, Optional[str]]) -> str:
    parts = [_sanitize_id(item_id)]
    seen = {item_id}
    parent = parents.get(item_id)
    while parent is not None and parent not in seen:
        parts.append(_sanitize_id(parent))
        seen.add(parent)
        parent = parents.get(parent)
    return ".".join(reversed(parts))


def _render_node(node: NodeRecord, registry: IconRegistry) -> str:
    """Render a node with its shape and icon"""
    node_id = _sanitize_id(node.id)
    icon = registry.resolve(node.icon) if node.icon else None
    shape = D2_SHAPE_MAP.get(icon or "", "rectangle")

    style_parts = []
    if shape != "rectangle":
        style_parts.append(f"shape: {shape}")
    if icon and icon != GENERIC_ICON:
        style_parts.append(f"icon: {icon}")

    if style_parts:
        return f'{node_id}: "{_escape(node.label)}" {{ {"; ".join(style_parts)} }}'
    return f'{node_id}: "{_escape(node.label)}"'
