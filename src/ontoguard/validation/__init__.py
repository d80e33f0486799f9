"""Repository validation: references, module scope, dependency cycles and membership."""

from typing import Optional

from ..entities.models import EntityIndex
from ..graph.builder import ModuleContext, build_module_context
from .cycles import validate_dependency_cycles
from .membership import validate_module_membership
from .models import ErrorType, ValidationIssue, ValidationReport
from .references import REFERENCE_FIELDS, normalize_references, validate_references


def validate_repository(
    entity_index: EntityIndex, context: Optional[ModuleContext] = None
) -> ValidationReport:
    """Run the reference, cycle and membership checks over one shared module context."""
    if context is None:
        context = build_module_context(entity_index)
    report = validate_references(entity_index, context)
    report.extend(validate_dependency_cycles(entity_index, context))
    report.extend(validate_module_membership(entity_index))
    return report


__all__ = [
    "REFERENCE_FIELDS",
    "ErrorType",
    "ValidationIssue",
    "ValidationReport",
    "normalize_references",
    "validate_dependency_cycles",
    "validate_module_membership",
    "validate_references",
    "validate_repository",
]
