"""Data models for the module dependency graph.

Edges are directed: adjacency[A] contains B means module A declares a
dependency on module B. Ordering operations return tagged outcomes
(TopologicalOrder or CycleDetected) instead of raising on cycles, since a
cyclic graph is a reportable repository state rather than a failure.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass
class ModuleGraph:
    """Module dependency graph built from module declarations."""

    nodes: list[str] = field(default_factory=list)
    adjacency: dict[str, list[str]] = field(default_factory=dict)
    reverse: dict[str, list[str]] = field(default_factory=dict)
    edge_count: int = 0

    # module -> declared dependencies that name no known module
    unresolved: dict[str, list[str]] = field(default_factory=dict)

    def has_node(self, module_id: str) -> bool:
        return module_id in self.adjacency

    def dependencies_of(self, module_id: str) -> list[str]:
        """Direct dependencies of a module, in declaration order."""
        return self.adjacency.get(module_id, [])

    def dependents_of(self, module_id: str) -> list[str]:
        """Modules that directly depend on ``module_id``."""
        return self.reverse.get(module_id, [])


@dataclass(frozen=True)
class TopologicalOrder:
    """Successful ordering: every module appears after its dependencies."""

    order: tuple[str, ...]


@dataclass(frozen=True)
class CycleDetected:
    """Failed ordering. ``path`` starts and ends at the same module."""

    path: tuple[str, ...]

    @property
    def members(self) -> frozenset[str]:
        return frozenset(self.path)

    def __str__(self) -> str:
        return " -> ".join(self.path)


OrderResult = Union[TopologicalOrder, CycleDetected]

# A module scope is a set of module ids, or the cycle that makes it undefined.
ScopeResult = Union[frozenset, CycleDetected]


@dataclass
class CycleGroup:
    """A strongly connected set of modules (a real dependency cycle).

    ``nodes`` is sorted for stable reporting. A single module that depends
    on itself forms a group of one.
    """

    nodes: list[str]
    internal_edge_count: int = 0
