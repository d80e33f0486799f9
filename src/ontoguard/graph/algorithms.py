"""Graph algorithms over module adjacency: ordering, closure, SCC."""

from collections import deque
from typing import Iterable, Optional

from .models import CycleDetected, CycleGroup, OrderResult, TopologicalOrder

_ON_PATH = 1
_DONE = 2


def topological_order(adjacency: dict[str, list[str]], nodes: Iterable[str]) -> OrderResult:
    """Order nodes so that every node comes after everything it depends on.

    Depth-first post-order, iterative to avoid recursion limits on long
    dependency chains. Roots are visited in ``nodes`` order and neighbours in
    adjacency order, so the result is deterministic. The first back edge found
    ends the walk with a CycleDetected carrying the offending path.
    """
    state: dict[str, int] = {}
    order: list[str] = []

    for root in nodes:
        if root in state:
            continue

        state[root] = _ON_PATH
        path: list[str] = [root]
        call_stack = [(root, iter(adjacency.get(root, [])))]

        while call_stack:
            node, it = call_stack[-1]
            pushed = False
            for dep in it:
                mark = state.get(dep)
                if mark == _ON_PATH:
                    start = path.index(dep)
                    return CycleDetected(path=tuple(path[start:]) + (dep,))
                if mark is None:
                    state[dep] = _ON_PATH
                    path.append(dep)
                    call_stack.append((dep, iter(adjacency.get(dep, []))))
                    pushed = True
                    break

            if not pushed:
                call_stack.pop()
                path.pop()
                state[node] = _DONE
                order.append(node)

    return TopologicalOrder(order=tuple(order))


def transitive_dependencies(adjacency: dict[str, list[str]], start: str) -> set[str]:
    """Everything reachable from ``start`` (BFS). Includes ``start`` only if
    it lies on a cycle."""
    visited: set[str] = set()
    queue: deque[str] = deque(adjacency.get(start, []))
    while queue:
        node = queue.popleft()
        if node in visited:
            continue
        visited.add(node)
        queue.extend(n for n in adjacency.get(node, []) if n not in visited)
    return visited


def find_cycle_through(adjacency: dict[str, list[str]], start: str) -> Optional[CycleDetected]:
    """Return a shortest cycle passing through ``start``, or None."""
    parent: dict[str, str] = {}
    queue: deque[str] = deque()
    for dep in adjacency.get(start, []):
        if dep == start:
            return CycleDetected(path=(start, start))
        if dep not in parent:
            parent[dep] = start
            queue.append(dep)

    while queue:
        node = queue.popleft()
        for dep in adjacency.get(node, []):
            if dep == start:
                path = [node]
                while path[-1] != start:
                    path.append(parent[path[-1]])
                path.reverse()
                return CycleDetected(path=tuple(path) + (start,))
            if dep not in parent:
                parent[dep] = node
                queue.append(dep)

    return None


def tarjan_scc(adjacency: dict[str, list[str]], nodes: Iterable[str]) -> list[set[str]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Uses an explicit call stack to avoid Python recursion limits on deep
    dependency chains.
    """
    all_nodes = list(nodes)
    known = set(all_nodes)
    counter = 0
    scc_stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    result: list[set[str]] = []

    for root in all_nodes:
        if root in index:
            continue

        call_stack: list[tuple] = []
        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        neighbors = [w for w in adjacency.get(root, []) if w in known]
        call_stack.append((root, iter(neighbors)))

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    w_neighbors = [n for n in adjacency.get(w, []) if n in known]
                    call_stack.append((w, iter(w_neighbors)))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if not pushed:
                call_stack.pop()
                if call_stack:
                    caller = call_stack[-1][0]
                    lowlink[caller] = min(lowlink[caller], lowlink[v])

                if lowlink[v] == index[v]:
                    component: set[str] = set()
                    while True:
                        w = scc_stack.pop()
                        on_stack.discard(w)
                        component.add(w)
                        if w == v:
                            break
                    result.append(component)

    return result


def find_cycle_groups(adjacency: dict[str, list[str]], nodes: Iterable[str]) -> list[CycleGroup]:
    """All dependency cycles: SCCs with more than one node, plus self-loops.

    Groups come back in the order Tarjan closes them, members sorted.
    """
    groups: list[CycleGroup] = []
    for scc in tarjan_scc(adjacency, nodes):
        if len(scc) == 1:
            (node,) = scc
            if node not in adjacency.get(node, []):
                continue
        internal_edges = sum(
            1 for n in scc for neighbor in adjacency.get(n, []) if neighbor in scc
        )
        groups.append(CycleGroup(nodes=sorted(scc), internal_edge_count=internal_edges))
    return groups
