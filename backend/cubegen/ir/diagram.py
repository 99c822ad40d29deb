from pydantic import BaseModel, Field
from typing import List, Optional

from cubegen.config import DEFAULT_TITLE


class ContainerRecord(BaseModel):
    id: str
    label: str
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    parent: Optional[str] = None          # enclosing container id


class NodeRecord(ContainerRecord):
    icon: Optional[str] = None            # checked against the icon library at render time


class LinkRecord(BaseModel):
    id: str                               # synthesized: l1, l2, ...
    source: str
    target: str
    bidirectional: bool = False
    label: Optional[str] = None


class DiagramDocument(BaseModel):
    title: str = DEFAULT_TITLE
    nodes: List[NodeRecord] = Field(default_factory=list)
    containers: List[ContainerRecord] = Field(default_factory=list)
    links: List[LinkRecord] = Field(default_factory=list)

    def declared_ids(self) -> set:
        return {n.id for n in self.nodes} | {c.id for c in self.containers}

    def to_dict(self) -> dict:
        """Plain data for renderers and storage; absent optional fields are omitted."""
        return self.model_dump(exclude_none=True)
