"""Version cascade: entity changes -> module -> bundle -> ontology bumps.

Each step is a pure function from immutable inputs to a new map:

1. calculate_module_bumps      worst change per owning module
2. propagate_dependency_cascade  dependents inherit their dependencies' bumps
3. apply_overrides             manual per-module overrides (optional)
4. calculate_bundle_bumps      worst module bump per bundle
5. calculate_ontology_bump     worst raw change anywhere
"""

from typing import Mapping, Optional, Sequence

from ..entities.models import EntityIndex
from ..graph.algorithms import topological_order
from ..graph.builder import (
    ModuleContext,
    build_module_context,
    build_reverse_module_index,
    module_key,
)
from ..graph.models import CycleDetected, ModuleGraph
from ..logging_config import get_logger
from .bumps import BumpLevel, BumpLike, max_bump_type
from .models import CascadeResult, ChangeRecord, split_entity_path
from .overrides import apply_overrides

logger = get_logger(__name__)


def _owning_module(reverse_index: Mapping[str, str], change: ChangeRecord) -> Optional[str]:
    entity_type, entity_id = split_entity_path(change.file)
    return reverse_index.get(module_key(entity_type, entity_id))


def calculate_module_bumps(
    entity_index: EntityIndex,
    changes: Sequence[ChangeRecord],
    reverse_index: Optional[Mapping[str, str]] = None,
) -> dict[str, BumpLevel]:
    """Aggregate entity changes per owning module.

    Changes to entities no module owns (orphans) contribute nothing here;
    see find_orphan_changes.
    """
    if reverse_index is None:
        reverse_index = build_reverse_module_index(entity_index)

    module_bumps: dict[str, BumpLevel] = {}
    for change in changes:
        module_id = _owning_module(reverse_index, change)
        if module_id is None:
            continue
        existing = module_bumps.get(module_id)
        if existing is None:
            module_bumps[module_id] = change.change_type
        else:
            module_bumps[module_id] = max_bump_type([existing, change.change_type])

    return module_bumps


def find_orphan_changes(
    entity_index: EntityIndex,
    changes: Sequence[ChangeRecord],
    reverse_index: Optional[Mapping[str, str]] = None,
) -> list[ChangeRecord]:
    """Changes whose entity is not owned by any module, in input order."""
    if reverse_index is None:
        reverse_index = build_reverse_module_index(entity_index)
    return [c for c in changes if _owning_module(reverse_index, c) is None]


def _cascade(
    graph: ModuleGraph, module_bumps: Mapping[str, BumpLevel]
) -> tuple[dict[str, BumpLevel], Optional[CycleDetected]]:
    cascaded = dict(module_bumps)

    ordering = topological_order(graph.adjacency, graph.nodes)
    if isinstance(ordering, CycleDetected):
        logger.warning("Module dependency cycle %s: bump cascade skipped", ordering)
        return cascaded, ordering

    for module_id in ordering.order:
        dep_bumps = [cascaded[d] for d in graph.dependencies_of(module_id) if d in cascaded]
        if not dep_bumps:
            continue

        current = cascaded.get(module_id)
        if current is None:
            final = max_bump_type(dep_bumps)
        else:
            final = max_bump_type([current, *dep_bumps])
        if final is not current:
            logger.debug("Cascade: %s %s -> %s", module_id, current, final)
        cascaded[module_id] = final

    return cascaded, None


def propagate_dependency_cascade(
    graph: ModuleGraph, module_bumps: Mapping[str, BumpLevel]
) -> dict[str, BumpLevel]:
    """Push bumps from dependencies onto dependents.

    Modules are processed dependencies-first, so a dependent sees the
    already-cascaded bump of each direct dependency and transitive
    dependents are covered. If the module graph has a cycle anywhere the
    whole pass is abandoned and the input comes back unchanged (as a new
    map); the cycle check reports the cycle itself.
    """
    cascaded, _ = _cascade(graph, module_bumps)
    return cascaded


def calculate_bundle_bumps(
    entity_index: EntityIndex, module_bumps: Mapping[str, BumpLevel]
) -> dict[str, BumpLevel]:
    """Worst bump among each bundle's bumped modules.

    Bundles with no bumped module are left out rather than given ``patch``.
    """
    bundle_bumps: dict[str, BumpLevel] = {}
    for bundle_id, bundle in entity_index.bundles.items():
        bumps = [module_bumps[m] for m in bundle.id_list("modules") if m in module_bumps]
        if bumps:
            bundle_bumps[bundle_id] = max_bump_type(bumps)
    return bundle_bumps


def calculate_ontology_bump(changes: Sequence[ChangeRecord]) -> BumpLevel:
    """Worst single change anywhere, orphans included.

    Deliberately computed from the raw change records, not from cascaded
    module or bundle bumps.
    """
    return max_bump_type(c.change_type for c in changes)


def calculate_version_cascade(
    entity_index: EntityIndex,
    changes: Sequence[ChangeRecord],
    overrides: Optional[Mapping[str, BumpLike]] = None,
    context: Optional[ModuleContext] = None,
) -> CascadeResult:
    """Compute bumps at every level for one change set.

    Args:
        entity_index: Snapshot of the repository's entities
        changes: Classified entity changes
        overrides: Optional module id -> forced bump table, applied to the
                   cascaded module bumps before bundles are aggregated
        context: Prebuilt graph and reverse index

    Returns:
        CascadeResult with module, bundle and ontology bumps plus orphans
    """
    changes = list(changes)
    if context is None:
        context = build_module_context(entity_index)

    initial = calculate_module_bumps(entity_index, changes, context.reverse_index)
    module_bumps, cycle = _cascade(context.graph, initial)

    override_warnings: list[str] = []
    if overrides:
        applied = apply_overrides(module_bumps, overrides)
        module_bumps = applied.bumps
        override_warnings = applied.warnings

    bundle_bumps = calculate_bundle_bumps(entity_index, module_bumps)
    ontology_bump = calculate_ontology_bump(changes)
    orphan_changes = find_orphan_changes(entity_index, changes, context.reverse_index)

    logger.debug(
        "Cascade: %d module(s), %d bundle(s), ontology %s, %d orphan change(s)",
        len(module_bumps),
        len(bundle_bumps),
        ontology_bump,
        len(orphan_changes),
    )

    return CascadeResult(
        module_bumps=module_bumps,
        bundle_bumps=bundle_bumps,
        ontology_bump=ontology_bump,
        orphan_changes=orphan_changes,
        changes=changes,
        override_warnings=override_warnings,
        cycle=cycle,
    )
