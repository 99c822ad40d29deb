from pydantic import BaseModel
from typing import Literal


class ParseRequest(BaseModel):
    source: str


class ExportRequest(BaseModel):
    """Parse DSL source and render it in another format"""
    source: str
    format: Literal["dsl", "mermaid", "d2"] = "mermaid"
    apply_layout: bool = False  # fill in missing coordinates before rendering


class ValidateRequest(BaseModel):
    source: str
    strict: bool = False  # treat warnings as failures
