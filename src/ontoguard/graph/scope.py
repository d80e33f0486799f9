"""Module scope resolution.

A module's scope is the module itself plus every module reachable through its
declared dependencies: the set of modules whose entities it may reference.
"""

from .algorithms import find_cycle_through, transitive_dependencies
from .models import CycleDetected, ModuleGraph, ScopeResult


def resolve_module_scope(graph: ModuleGraph, module_id: str) -> ScopeResult:
    """Return ``{module_id} | transitive_dependencies(module_id)``.

    When ``module_id`` sits on a dependency cycle its scope is undefined and
    the cycle is returned instead. Callers skip scope checks for such
    modules; reporting the cycle belongs to the cycle check.
    """
    cycle = find_cycle_through(graph.adjacency, module_id)
    if cycle is not None:
        return cycle
    return frozenset(transitive_dependencies(graph.adjacency, module_id) | {module_id})


def is_indeterminate(scope: ScopeResult) -> bool:
    return isinstance(scope, CycleDetected)
