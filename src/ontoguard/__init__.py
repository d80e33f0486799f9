"""
ontoguard - module scope validation and version cascade for ontology repositories.

Builds the module dependency graph of a typed ontology repository, checks
that every cross-entity reference stays inside its module's dependency scope,
and works out the semantic-version bump each module, bundle and the ontology
as a whole needs for a set of classified changes.
"""

__version__ = "0.1.0"

from .entities import Entity, EntityIndex, load_entity_index
from .graph import ModuleContext, build_module_context
from .validation import ValidationReport, validate_references, validate_repository
from .versioning import (
    BumpLevel,
    CascadeResult,
    ChangeRecord,
    calculate_new_version,
    calculate_version_cascade,
)

__all__ = [
    "BumpLevel",
    "CascadeResult",
    "ChangeRecord",
    "Entity",
    "EntityIndex",
    "ModuleContext",
    "ValidationReport",
    "build_module_context",
    "calculate_new_version",
    "calculate_version_cascade",
    "load_entity_index",
    "validate_references",
    "validate_repository",
]
