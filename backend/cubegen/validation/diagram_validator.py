"""
Diagram Validator - advisory checks on a successfully parsed document.

Parse errors make a document unusable; these issues do not. They point at
things a user probably did not mean:
- Orphaned nodes (no links)
- Self-loops
- Duplicate links
- Icon tags missing from the icon library
- Empty containers
"""

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from cubegen.icons.registry import IconRegistry, get_icon_registry
from cubegen.ir.diagram import DiagramDocument


class ValidationSeverity(Enum):
    ERROR = "error"      # Diagram will not render correctly
    WARNING = "warning"  # Diagram renders but has issues
    INFO = "info"        # Suggestions for improvement


@dataclass
class ValidationIssue:
    """A single validation issue found in the diagram"""
    severity: ValidationSeverity
    code: str           # Machine-readable issue code
    message: str        # Human-readable description
    node_id: Optional[str] = None
    link_id: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "node_id": self.node_id,
            "link_id": self.link_id,
            "suggestion": self.suggestion,
        }


@dataclass
class DiagramValidationResult:
    """Result of diagram validation"""
    is_valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.INFO)

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "info_count": self.info_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        """Get human-readable summary"""
        status = "Valid" if self.is_valid else "Invalid"
        return (
            f"{status} | "
            f"Errors: {self.error_count}, Warnings: {self.warning_count}, Info: {self.info_count}"
        )


class DiagramValidator:
    """
    Lints parsed diagram documents.

    Usage:
        validator = DiagramValidator()
        result = validator.validate(parse_dsl(source).document)

        for issue in result.issues:
            print(f"[{issue.severity.value}] {issue.message}")
    """

    def __init__(self, strict_mode: bool = False, registry: Optional[IconRegistry] = None):
        self.strict_mode = strict_mode
        self.registry = registry or get_icon_registry()

    def validate(self, document: DiagramDocument) -> DiagramValidationResult:
        """Validate the entire document."""
        issues: List[ValidationIssue] = []

        issues.extend(self._check_empty_diagram(document))
        issues.extend(self._check_orphaned_nodes(document))
        issues.extend(self._check_self_loops(document))
        issues.extend(self._check_duplicate_links(document))
        issues.extend(self._check_unknown_icons(document))
        issues.extend(self._check_empty_containers(document))

        has_errors = any(i.severity == ValidationSeverity.ERROR for i in issues)
        has_warnings = any(i.severity == ValidationSeverity.WARNING for i in issues)

        is_valid = not has_errors
        if self.strict_mode:
            is_valid = not has_errors and not has_warnings

        return DiagramValidationResult(
            is_valid=is_valid,
            issues=issues,
            stats=self._calculate_stats(document),
        )

    def _check_empty_diagram(self, document: DiagramDocument) -> List[ValidationIssue]:
        issues = []
        if not document.nodes and not document.containers:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="EMPTY_DIAGRAM",
                message="Diagram declares no nodes or containers",
                suggestion="Add a declaration such as: node api: \"API\"",
            ))
        elif not document.links and len(document.nodes) > 1:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.INFO,
                code="NO_LINKS",
                message=f"Diagram has {len(document.nodes)} nodes but no links",
                suggestion="Connect components with: a -> b",
            ))
        return issues

    def _check_orphaned_nodes(self, document: DiagramDocument) -> List[ValidationIssue]:
        issues = []
        if len(document.nodes) < 2:
            return issues

        connected: Set[str] = set()
        for link in document.links:
            connected.add(link.source)
            connected.add(link.target)

        for node in document.nodes:
            if node.id not in connected:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="ORPHANED_NODE",
                    message=f"Node '{node.label}' ({node.id}) has no links",
                    node_id=node.id,
                    suggestion="Link this node to other components or remove it if unused",
                ))
        return issues

    def _check_self_loops(self, document: DiagramDocument) -> List[ValidationIssue]:
        issues = []
        for link in document.links:
            if link.source == link.target:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="SELF_LOOP",
                    message=f"Link creates self-loop on '{link.source}'",
                    node_id=link.source,
                    link_id=link.id,
                    suggestion="Remove self-referencing link unless intentional",
                ))
        return issues

    def _check_duplicate_links(self, document: DiagramDocument) -> List[ValidationIssue]:
        issues = []
        counts: Dict[Tuple[str, str, bool, str], List[str]] = defaultdict(list)
        for link in document.links:
            key = (link.source, link.target, link.bidirectional, link.label or "")
            counts[key].append(link.id)
        for (source, target, bidirectional, label), link_ids in counts.items():
            if len(link_ids) > 1:
                arrow = "<->" if bidirectional else "->"
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    code="DUPLICATE_LINK",
                    message=f"Link '{source} {arrow} {target}' appears {len(link_ids)} times",
                    link_id=link_ids[1],
                    suggestion="Consider consolidating duplicate links",
                ))
        return issues

    def _check_unknown_icons(self, document: DiagramDocument) -> List[ValidationIssue]:
        issues = []
        for node in document.nodes:
            if node.icon and self.registry.resolve(node.icon) != node.icon:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="UNKNOWN_ICON",
                    message=f"Icon '{node.icon}' on '{node.id}' is not in the icon library",
                    node_id=node.id,
                    suggestion="The generic icon will be drawn instead",
                ))
        return issues

    def _check_empty_containers(self, document: DiagramDocument) -> List[ValidationIssue]:
        issues = []
        parents = {n.parent for n in document.nodes} | {c.parent for c in document.containers}
        for container in document.containers:
            if container.id not in parents:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    code="EMPTY_CONTAINER",
                    message=f"Container '{container.label}' ({container.id}) is empty",
                    node_id=container.id,
                    suggestion="Declare nodes inside its { } block or with parent=",
                ))
        return issues

    def _calculate_stats(self, document: DiagramDocument) -> Dict[str, int]:
        connected = set()
        for link in document.links:
            connected.add(link.source)
            connected.add(link.target)

        return {
            "nodes": len(document.nodes),
            "containers": len(document.containers),
            "links": len(document.links),
            "bidirectional_links": sum(1 for l in document.links if l.bidirectional),
            "orphaned_nodes": sum(1 for n in document.nodes if n.id not in connected),
        }


def validate_diagram(document: DiagramDocument, strict: bool = False) -> DiagramValidationResult:
    """Convenience function to validate a document."""
    validator = DiagramValidator(strict_mode=strict)
    return validator.validate(document)


def get_validation_summary(document: DiagramDocument) -> str:
    """Get a quick validation summary string."""
    return validate_diagram(document).get_summary()
