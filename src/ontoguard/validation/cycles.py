"""Module dependency cycle check.

Scope resolution and the version cascade both step around cycles silently;
this check is where a cycle actually gets reported. Its errors must be clean
before either of those results is trusted.
"""

from typing import Optional

from ..entities.models import EntityIndex
from ..graph.algorithms import find_cycle_groups
from ..graph.builder import ModuleContext, build_module_context
from .models import ErrorType, ValidationIssue, ValidationReport


def validate_dependency_cycles(
    entity_index: EntityIndex, context: Optional[ModuleContext] = None
) -> ValidationReport:
    """Report one ``dependency-cycle`` error per cycle of two or more modules.

    The error is attributed to the file of the first module (by id) in the
    cycle. A module listing itself in ``dependencies`` is left to the
    reference check, which reports it as a self-reference.
    """
    if context is None:
        context = build_module_context(entity_index)

    graph = context.graph
    report = ValidationReport()

    for group in find_cycle_groups(graph.adjacency, graph.nodes):
        if len(group.nodes) < 2:
            continue
        first = group.nodes[0]
        module = entity_index.modules.get(first)
        members = ", ".join(f'"{m}"' for m in group.nodes)
        message = f"Circular module dependency between {members}"
        report.errors.append(
            ValidationIssue(
                file=module.file_path if module is not None else "",
                type=ErrorType.DEPENDENCY_CYCLE,
                message=message,
                entity_type="modules",
                entity_id=first,
                field="dependencies",
            )
        )

    return report
