from cubegen.ir.result import ParseResult


def serialize_parse_result(result: ParseResult) -> dict:
    """
    Plain-data view of a parse result for the editor.

    Success and failure payloads are exclusive; a failure never carries a
    partial document.
    """
    if result.success:
        return {
            "status": "success",
            "document": result.document.to_dict(),
        }

    return {
        "status": "invalid",
        "errors": [e.to_dict() for e in result.errors],
        "first_error_line": result.first_error_line,
    }
