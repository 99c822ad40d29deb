"""
CubeGen DSL: a line-oriented text format for architecture diagrams.

    // comment
    title "Web Application"
    container vpc: "VPC" {
      node api: "API Server" icon=Api x=500 y=200
    }
    node db: "Database" icon=Database parent=vpc
    api -> db: "Query"
"""

from cubegen.dsl.parser import DocumentScanner, ParsePhase, parse_dsl
from cubegen.dsl.tokenizer import ClassifiedLine, LineKind, classify_lines

__all__ = [
    "ClassifiedLine",
    "DocumentScanner",
    "LineKind",
    "ParsePhase",
    "classify_lines",
    "parse_dsl",
]
