"""
Exporters for parsed diagrams.
"""

from cubegen.compiler.layout import apply_default_layout
from cubegen.compiler.render_d2 import render_d2
from cubegen.compiler.render_dsl import render_dsl
from cubegen.compiler.render_mermaid import render_mermaid
from cubegen.ir.diagram import DiagramDocument

RENDERERS = {
    "dsl": render_dsl,
    "mermaid": render_mermaid,
    "d2": render_d2,
}


def compile_document(document: DiagramDocument, fmt: str = "mermaid") -> str:
    """Render *document* in the named output format (dsl | mermaid | d2)."""
    renderer = RENDERERS.get(fmt)
    if renderer is None:
        raise ValueError(
            f"Unknown output format '{fmt}'. Expected one of: {', '.join(RENDERERS)}"
        )
    return renderer(document)


__all__ = [
    "RENDERERS",
    "apply_default_layout",
    "compile_document",
    "render_d2",
    "render_dsl",
    "render_mermaid",
]
