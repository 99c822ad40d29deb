from cubegen.dsl import parse_dsl
from cubegen.ir import DiagramDocument, ParseError, ParseResult

__version__ = "0.1.0"

__all__ = ["DiagramDocument", "ParseError", "ParseResult", "parse_dsl"]
