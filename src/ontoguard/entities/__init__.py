"""Typed ontology entities and the per-type entity index."""

from .index import discover_entity_files, load_entity_index
from .models import (
    BUNDLES,
    CATEGORIES,
    ENTITY_TYPES,
    MEMBER_TYPES,
    MODULES,
    PROPERTIES,
    SUBOBJECTS,
    TEMPLATES,
    Entity,
    EntityIndex,
)

__all__ = [
    "BUNDLES",
    "CATEGORIES",
    "ENTITY_TYPES",
    "MEMBER_TYPES",
    "MODULES",
    "PROPERTIES",
    "SUBOBJECTS",
    "TEMPLATES",
    "Entity",
    "EntityIndex",
    "discover_entity_files",
    "load_entity_index",
]
