"""Module dependency graph: construction, ordering, scope resolution."""

from .algorithms import (
    find_cycle_groups,
    find_cycle_through,
    tarjan_scc,
    topological_order,
    transitive_dependencies,
)
from .builder import (
    ModuleContext,
    build_module_context,
    build_module_graph,
    build_reverse_module_index,
    module_key,
)
from .models import CycleDetected, CycleGroup, ModuleGraph, TopologicalOrder
from .scope import is_indeterminate, resolve_module_scope

__all__ = [
    "CycleDetected",
    "CycleGroup",
    "ModuleContext",
    "ModuleGraph",
    "TopologicalOrder",
    "build_module_context",
    "build_module_graph",
    "build_reverse_module_index",
    "find_cycle_groups",
    "find_cycle_through",
    "is_indeterminate",
    "module_key",
    "resolve_module_scope",
    "tarjan_scc",
    "topological_order",
    "transitive_dependencies",
]
