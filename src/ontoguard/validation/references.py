"""Reference validation across the entity index.

Every declared reference field is checked for self-reference, target
existence and, for module members, module-scope containment. All entities are
checked in one pass and every problem is collected; nothing stops at the
first error.
"""

from typing import Any, Optional

from ..entities.models import (
    BUNDLES,
    CATEGORIES,
    MEMBER_TYPES,
    MODULES,
    PROPERTIES,
    SUBOBJECTS,
    TEMPLATES,
    Entity,
    EntityIndex,
)
from ..graph.builder import ModuleContext, build_module_context
from ..graph.models import ScopeResult
from ..graph.scope import is_indeterminate, resolve_module_scope
from ..logging_config import get_logger
from .models import ErrorType, ValidationIssue, ValidationReport

logger = get_logger(__name__)

# entity type -> reference field -> target entity type
REFERENCE_FIELDS: dict[str, dict[str, str]] = {
    CATEGORIES: {
        "parents": CATEGORIES,
        "required_properties": PROPERTIES,
        "optional_properties": PROPERTIES,
        "required_subobjects": SUBOBJECTS,
        "optional_subobjects": SUBOBJECTS,
    },
    SUBOBJECTS: {
        "required_properties": PROPERTIES,
        "optional_properties": PROPERTIES,
    },
    PROPERTIES: {
        "parent_property": PROPERTIES,
        "has_display_template": TEMPLATES,
    },
    MODULES: {
        "categories": CATEGORIES,
        "properties": PROPERTIES,
        "subobjects": SUBOBJECTS,
        "templates": TEMPLATES,
        "dependencies": MODULES,
    },
    BUNDLES: {
        "modules": MODULES,
    },
}

# Modules and bundles define scope rather than live inside one.
SCOPE_CHECK_TYPES = frozenset(MEMBER_TYPES)


def normalize_references(value: Any) -> list[str]:
    """Absent or empty -> [], scalar -> [value], sequence -> list(value)."""
    if value is None or value == "" or value == []:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class _ScopeCache:
    """Per-run memo of module scopes so each module is resolved once."""

    def __init__(self, context: ModuleContext):
        self._context = context
        self._scopes: dict[str, ScopeResult] = {}

    def get(self, module_id: str) -> ScopeResult:
        if module_id not in self._scopes:
            scope = resolve_module_scope(self._context.graph, module_id)
            if is_indeterminate(scope):
                logger.debug("Scope of %s indeterminate (cycle %s)", module_id, scope)
            self._scopes[module_id] = scope
        return self._scopes[module_id]


def _check_entity(
    entity: Entity,
    field_map: dict[str, str],
    entity_index: EntityIndex,
    context: ModuleContext,
    scopes: _ScopeCache,
) -> list[ValidationIssue]:
    errors: list[ValidationIssue] = []
    entity_type = entity.entity_type

    source_module: Optional[str] = None
    scope: Optional[ScopeResult] = None
    if entity_type in SCOPE_CHECK_TYPES:
        source_module = context.owner_of(entity_type, entity.id)
        if source_module is not None:
            scope = scopes.get(source_module)

    for field_name, target_type in field_map.items():
        for ref_id in normalize_references(entity.get(field_name)):
            issue = ValidationIssue(
                file=entity.file_path,
                type=ErrorType.SELF_REFERENCE,
                message="",
                entity_type=entity_type,
                entity_id=entity.id,
                field=field_name,
                target=str(ref_id),
            )

            if ref_id == entity.id and target_type == entity_type:
                issue.message = (
                    f'Self-reference in field "{field_name}": "{ref_id}" references itself'
                )
                errors.append(issue)
                continue

            if not entity_index.has(target_type, ref_id):
                issue.type = ErrorType.MISSING_REFERENCE
                issue.message = (
                    f'Missing reference in field "{field_name}": '
                    f'"{ref_id}" does not exist in {target_type}'
                )
                errors.append(issue)
                continue

            if scope is None or is_indeterminate(scope) or target_type == MODULES:
                continue

            target_module = context.owner_of(target_type, ref_id)
            if target_module is None or target_module in scope:
                continue

            issue.type = ErrorType.SCOPE_VIOLATION
            issue.source_module = source_module
            issue.target_module = target_module
            issue.message = (
                f'Module scope violation in field "{field_name}": "{ref_id}" is in module '
                f'"{target_module}" which is not a dependency of "{source_module}"'
            )
            errors.append(issue)

    return errors


def validate_references(
    entity_index: EntityIndex, context: Optional[ModuleContext] = None
) -> ValidationReport:
    """Check every declared reference field of every entity.

    Args:
        entity_index: Snapshot of the repository's entities
        context: Prebuilt graph and reverse index; built from the index
                 when omitted

    Returns:
        Report with one error per bad reference (warnings stay empty)
    """
    if context is None:
        context = build_module_context(entity_index)

    report = ValidationReport()
    scopes = _ScopeCache(context)

    for entity_type, field_map in REFERENCE_FIELDS.items():
        for entity in entity_index.of_type(entity_type).values():
            report.errors.extend(_check_entity(entity, field_map, entity_index, context, scopes))

    logger.debug("Reference validation found %d error(s)", len(report.errors))
    return report
