"""Module membership check.

Each member entity should be listed by exactly one module. A shared member
is not fatal: ownership resolves to the module indexed last, the same rule
the reverse module index applies. Scope and cascade results for that entity
follow the winner, so the overlap is surfaced as a warning.
"""

from typing import Optional

from ..entities.models import MEMBER_TYPES, EntityIndex
from ..graph.builder import module_key
from ..logging_config import get_logger
from .models import ValidationReport

logger = get_logger(__name__)


def validate_module_membership(entity_index: EntityIndex) -> ValidationReport:
    """Warn once for every module that claims an entity another module already lists."""
    report = ValidationReport()
    owners: dict[str, str] = {}

    for module_id, module in entity_index.modules.items():
        for entity_type in MEMBER_TYPES:
            for entity_id in module.id_list(entity_type):
                key = module_key(entity_type, entity_id)
                owner: Optional[str] = owners.get(key)
                if owner is not None and owner != module_id:
                    report.warnings.append(
                        f'{entity_type} "{entity_id}" is listed by modules "{owner}" and '
                        f'"{module_id}"; "{module_id}" takes ownership'
                    )
                owners[key] = module_id

    if report.warnings:
        logger.debug("%d shared module member(s)", len(report.warnings))
    return report
