"""Entity data model: typed content records and the per-type index.

Six entity types make up an ontology repository. Four of them are content
(categories, properties, subobjects, templates) and are owned by modules;
modules group content and declare dependencies on other modules; bundles
group modules.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from ..exceptions import UnknownEntityTypeError

CATEGORIES = "categories"
PROPERTIES = "properties"
SUBOBJECTS = "subobjects"
TEMPLATES = "templates"
MODULES = "modules"
BUNDLES = "bundles"

ENTITY_TYPES: tuple[str, ...] = (CATEGORIES, PROPERTIES, SUBOBJECTS, TEMPLATES, MODULES, BUNDLES)

# Types a module can list as members (and therefore the only ones that have
# an owning module).
MEMBER_TYPES: tuple[str, ...] = (CATEGORIES, PROPERTIES, SUBOBJECTS, TEMPLATES)


@dataclass
class Entity:
    """One typed content record.

    ``data`` is the parsed JSON document; ``file_path`` is the source path
    relative to the repository root, used in error reports.
    """

    entity_type: str
    id: str
    data: dict[str, Any] = field(default_factory=dict)
    file_path: str = ""

    def get(self, field_name: str, default: Any = None) -> Any:
        return self.data.get(field_name, default)

    def id_list(self, field_name: str) -> list[str]:
        """Return a list-valued field, treating absent or null as empty."""
        value = self.data.get(field_name)
        if not value:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    @property
    def dependencies(self) -> list[str]:
        return self.id_list("dependencies")


@dataclass
class EntityIndex:
    """Typed maps of every entity in the repository, keyed by id.

    Each map keeps insertion order; all aggregation over modules and bundles
    follows it.
    """

    categories: dict[str, Entity] = field(default_factory=dict)
    properties: dict[str, Entity] = field(default_factory=dict)
    subobjects: dict[str, Entity] = field(default_factory=dict)
    templates: dict[str, Entity] = field(default_factory=dict)
    modules: dict[str, Entity] = field(default_factory=dict)
    bundles: dict[str, Entity] = field(default_factory=dict)

    def of_type(self, entity_type: str) -> dict[str, Entity]:
        if entity_type not in ENTITY_TYPES:
            raise UnknownEntityTypeError(entity_type)
        return getattr(self, entity_type)

    def add(self, entity: Entity) -> Optional[Entity]:
        """Insert an entity, returning the one it replaced (if any)."""
        entities = self.of_type(entity.entity_type)
        previous = entities.get(entity.id)
        entities[entity.id] = entity
        return previous

    def get(self, entity_type: str, entity_id: str) -> Optional[Entity]:
        return self.of_type(entity_type).get(entity_id)

    def has(self, entity_type: str, entity_id: str) -> bool:
        return entity_id in self.of_type(entity_type)

    def __iter__(self) -> Iterator[Entity]:
        for entity_type in ENTITY_TYPES:
            yield from self.of_type(entity_type).values()

    def __len__(self) -> int:
        return sum(len(self.of_type(t)) for t in ENTITY_TYPES)

    @classmethod
    def from_documents(cls, documents: dict[str, list[dict[str, Any]]]) -> "EntityIndex":
        """Build an index from ``{entity_type: [document, ...]}``.

        Each document must carry an ``id``; its file path is derived as
        ``<entity_type>/<id>.json``.
        """
        index = cls()
        for entity_type, docs in documents.items():
            for doc in docs:
                index.add(
                    Entity(
                        entity_type=entity_type,
                        id=doc["id"],
                        data=dict(doc),
                        file_path=f"{entity_type}/{doc['id']}.json",
                    )
                )
        return index
