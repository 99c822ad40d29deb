"""
Advisory validation for parsed diagrams.
"""

from cubegen.validation.diagram_validator import (
    DiagramValidationResult,
    DiagramValidator,
    ValidationIssue,
    ValidationSeverity,
    get_validation_summary,
    validate_diagram,
)

__all__ = [
    "DiagramValidationResult",
    "DiagramValidator",
    "ValidationIssue",
    "ValidationSeverity",
    "get_validation_summary",
    "validate_diagram",
]
