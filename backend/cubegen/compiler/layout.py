from typing import Dict, List, Optional

from cubegen.config import (
    GRID_COLUMNS,
    GRID_SPACING_X,
    GRID_SPACING_Y,
    NODE_HEIGHT,
    NODE_WIDTH,
)
from cubegen.ir.diagram import ContainerRecord, DiagramDocument

CONTAINER_PADDING = 20.0


def apply_default_layout(document: DiagramDocument) -> DiagramDocument:
    """
    Fill in geometry the source left out, for renderers that need every box
    placed. Returns a new document; values written in the source are kept.

    - missing x/y: next free slot on a grid, in declaration order
    - missing node width/height: configured defaults
    - missing container width/height: bounding box of its children plus padding
    """
    doc = document.model_copy(deep=True)
    columns = max(GRID_COLUMNS, 1)

    for slot, item in enumerate(list(doc.containers) + list(doc.nodes)):
        if item.x is None:
            item.x = (slot % columns) * GRID_SPACING_X
        if item.y is None:
            item.y = (slot // columns) * GRID_SPACING_Y

    for node in doc.nodes:
        if node.width is None:
            node.width = NODE_WIDTH
        if node.height is None:
            node.height = NODE_HEIGHT

    # innermost containers first so outer boxes see sized children
    by_id = {c.id: c for c in doc.containers}
    for container in sorted(doc.containers, key=lambda c: -_depth(c, by_id)):
        _fit_container(container, doc)

    return doc


def _depth(container: ContainerRecord, by_id: Dict[str, ContainerRecord]) -> int:
    depth = 0
    seen = {container.id}
    parent = by_id.get(container.parent) if container.parent else None
    while parent is not None and parent.id not in seen:
        depth += 1
        seen.add(parent.id)
        parent = by_id.get(parent.parent) if parent.parent else None
    return depth


def _fit_container(container: ContainerRecord, doc: DiagramDocument) -> None:
    if container.width is not None and container.height is not None:
        return

    children: List[ContainerRecord] = [
        item
        for item in list(doc.containers) + list(doc.nodes)
        if item.parent == container.id and item.id != container.id
    ]
    boxes = [
        (c.x, c.y, c.x + (c.width or NODE_WIDTH), c.y + (c.height or NODE_HEIGHT))
        for c in children
    ]

    width: Optional[float] = None
    height: Optional[float] = None
    if boxes:
        right = max(b[2] for b in boxes)
        bottom = max(b[3] for b in boxes)
        width = max(right - container.x, 0.0) + CONTAINER_PADDING
        height = max(bottom - container.y, 0.0) + CONTAINER_PADDING

    if container.width is None:
        container.width = width if width else NODE_WIDTH
    if container.height is None:
        container.height = height if height else NODE_HEIGHT
