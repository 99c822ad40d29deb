import logging

from fastapi import APIRouter, HTTPException

from cubegen.api.serializers import serialize_parse_result
from cubegen.compiler import apply_default_layout, compile_document
from cubegen.dsl import parse_dsl
from cubegen.icons.registry import get_icon_registry
from cubegen.schemas import ExportRequest, ParseRequest, ValidateRequest
from cubegen.validation import validate_diagram

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


# ============================================================
# PARSE ENDPOINT - the editor's "Generate" action
# ============================================================

@router.post("/parse")
def parse_source(request: ParseRequest):
    """
    Parse DSL source into a diagram document.

    Malformed input is not an HTTP error: the response has
    ``status: "invalid"`` and every diagnostic, ordered by line.
    """
    result = parse_dsl(request.source)
    if not result.success:
        logger.info("Parse failed with %d errors (first on line %d)",
                    len(result.errors), result.first_error_line)
    return serialize_parse_result(result)


# ============================================================
# EXPORT ENDPOINT - DSL / Mermaid / D2
# ============================================================

@router.post("/export")
def export_source(request: ExportRequest):
    result = parse_dsl(request.source)
    if not result.success:
        return serialize_parse_result(result)

    document = result.document
    if request.apply_layout:
        document = apply_default_layout(document)

    try:
        output = compile_document(document, request.format)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "status": "success",
        "format": request.format,
        "output": output,
    }


# ============================================================
# VALIDATION ENDPOINT - parse, then lint
# ============================================================

@router.post("/validate")
def validate_source(request: ValidateRequest):
    """
    Parse the source and run advisory checks on the resulting document.
    Parse errors are returned as-is; lint runs only on a clean parse.
    """
    result = parse_dsl(request.source)
    if not result.success:
        return serialize_parse_result(result)

    validation = validate_diagram(result.document, strict=request.strict)

    return {
        "status": "success" if validation.is_valid else "invalid",
        "summary": validation.get_summary(),
        "is_valid": validation.is_valid,
        "issues": [i.to_dict() for i in validation.issues],
        "stats": validation.stats,
    }


# ============================================================
# ICON LIBRARY
# ============================================================

@router.get("/icons")
def list_icons(preload: bool = False):
    """List icon tags usable in ``icon=``. Cloud icons appear once loaded."""
    registry = get_icon_registry()
    if preload:
        registry.preload()
    return {
        "state": registry.state.value,
        "icons": registry.names(),
    }
