from dataclasses import dataclass, field
from typing import List, Optional

from .diagram import DiagramDocument
from .errors import ParseError


@dataclass
class ParseResult:
    """
    Outcome of one parse call.

    Success and failure are exclusive: a failed parse carries every
    collected error and no document.
    """
    success: bool
    document: Optional[DiagramDocument] = None
    errors: List[ParseError] = field(default_factory=list)

    @classmethod
    def ok(cls, document: DiagramDocument):
        return cls(success=True, document=document, errors=[])

    @classmethod
    def failure(cls, errors: List[ParseError]):
        return cls(success=False, document=None, errors=list(errors))

    @property
    def first_error_line(self) -> Optional[int]:
        return self.errors[0].line if self.errors else None
