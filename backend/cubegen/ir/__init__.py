from .diagram import (
    ContainerRecord,
    DiagramDocument,
    LinkRecord,
    NodeRecord,
)
from .errors import ParseError
from .result import ParseResult

__all__ = [
    "ContainerRecord",
    "DiagramDocument",
    "LinkRecord",
    "NodeRecord",
    "ParseError",
    "ParseResult",
]
