"""Module dependency graph and reverse module index construction."""

from dataclasses import dataclass, field
from typing import Optional

from ..entities.models import MEMBER_TYPES, EntityIndex
from ..logging_config import get_logger
from .models import ModuleGraph

logger = get_logger(__name__)


def module_key(entity_type: str, entity_id: str) -> str:
    """Reverse index key for an entity: ``"type:id"``."""
    return f"{entity_type}:{entity_id}"


def build_module_graph(entity_index: EntityIndex) -> ModuleGraph:
    """Build the module dependency graph.

    Every module becomes a node. A declared dependency becomes an edge only
    when it names a known module; unknown ones are recorded in
    ``unresolved`` and otherwise ignored (reporting them is the reference
    validator's job).
    """
    nodes = list(entity_index.modules)
    adjacency: dict[str, list[str]] = {m: [] for m in nodes}
    reverse: dict[str, list[str]] = {m: [] for m in nodes}
    unresolved: dict[str, list[str]] = {}
    edge_count = 0

    for module_id, module in entity_index.modules.items():
        for dep_id in module.dependencies:
            if dep_id not in adjacency:
                logger.debug("Module %s depends on unknown module %s", module_id, dep_id)
                unresolved.setdefault(module_id, []).append(dep_id)
                continue
            if dep_id in adjacency[module_id]:
                continue
            adjacency[module_id].append(dep_id)
            reverse[dep_id].append(module_id)
            edge_count += 1

    return ModuleGraph(
        nodes=nodes,
        adjacency=adjacency,
        reverse=reverse,
        edge_count=edge_count,
        unresolved=unresolved,
    )


def build_reverse_module_index(entity_index: EntityIndex) -> dict[str, str]:
    """Map ``"type:id"`` of every module member to its owning module.

    Entities no module lists (orphans) are absent. When two modules claim the
    same entity the later module in index order wins.
    """
    reverse_index: dict[str, str] = {}

    for module_id, module in entity_index.modules.items():
        for entity_type in MEMBER_TYPES:
            for entity_id in module.id_list(entity_type):
                key = module_key(entity_type, entity_id)
                owner = reverse_index.get(key)
                if owner is not None and owner != module_id:
                    logger.debug("%s listed by both %s and %s", key, owner, module_id)
                reverse_index[key] = module_id

    return reverse_index


@dataclass
class ModuleContext:
    """Graph and reverse index built once and shared by the validator and
    the cascade engine."""

    graph: ModuleGraph = field(default_factory=ModuleGraph)
    reverse_index: dict[str, str] = field(default_factory=dict)

    def owner_of(self, entity_type: str, entity_id: str) -> Optional[str]:
        return self.reverse_index.get(module_key(entity_type, entity_id))


def build_module_context(entity_index: EntityIndex) -> ModuleContext:
    return ModuleContext(
        graph=build_module_graph(entity_index),
        reverse_index=build_reverse_module_index(entity_index),
    )
