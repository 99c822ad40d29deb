# backend/cubegen/compiler/render_mermaid.py

import re
from collections import defaultdict
from typing import Dict, List, Optional

from cubegen.ir.diagram import DiagramDocument


class _IdMapper:
    """Maps DSL IDs (which may contain '-') to short Mermaid-safe sequential IDs."""

    def __init__(self, prefix: str = "nd"):
        self._prefix = prefix
        self._counter = 0
        self._map: dict[str, str] = {}

    def get(self, raw_id: str) -> str:
        if raw_id not in self._map:
            self._counter += 1
            self._map[raw_id] = f"{self._prefix}{self._counter}"
        return self._map[raw_id]


def _clean_label(label: str) -> str:
    label = re.sub(r'[|"#;]', "", label)
    return re.sub(r"\s+", " ", label).strip()


def render_mermaid(document: DiagramDocument) -> str:
    """
    Converts DiagramDocument → Mermaid flowchart.
    Containers become (nested) subgraphs; nodes are drawn inside their parent.
    """
    ids = _IdMapper()
    lines = ["flowchart TD"]

    container_ids = {c.id for c in document.containers}

    # -------------------------
    # Group children by parent
    # -------------------------
    child_containers: Dict[Optional[str], List] = defaultdict(list)
    child_nodes: Dict[Optional[str], List] = defaultdict(list)

    for container in document.containers:
        parent = container.parent if container.parent in container_ids else None
        child_containers[parent].append(container)

    for node in document.nodes:
        parent = node.parent if node.parent in container_ids else None
        child_nodes[parent].append(node)

    def emit(parent: Optional[str], depth: int) -> None:
        indent = "  " * depth
        for container in child_containers.get(parent, []):
            label = container.label.replace('"', "'")
            lines.append(f'{indent}subgraph {ids.get(container.id)}["{label}"]')
            emit(container.id, depth + 1)
            lines.append(f"{indent}end")
        for node in child_nodes.get(parent, []):
            label = node.label.replace('"', "'")
            lines.append(f'{indent}{ids.get(node.id)}["{label}"]')

    emit(None, 1)

    # -------------------------
    # Links (with labels)
    # -------------------------
    for link in document.links:
        src = ids.get(link.source)
        tgt = ids.get(link.target)
        label = _clean_label(link.label) if link.label else ""
        arrow = "<-->" if link.bidirectional else "-->"

        if label:
            lines.append(f"  {src} {arrow}|{label}| {tgt}")
        else:
            lines.append(f"  {src} {arrow} {tgt}")

    return "\n".join(lines)
