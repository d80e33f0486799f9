"""Version bump calculation and cascade through module dependencies."""

from .bumps import BumpLevel, max_bump_type
from .cascade import (
    calculate_bundle_bumps,
    calculate_module_bumps,
    calculate_ontology_bump,
    calculate_version_cascade,
    find_orphan_changes,
    propagate_dependency_cascade,
)
from .models import CascadeResult, ChangeRecord, OverrideResult, load_change_records
from .overrides import DEFAULT_OVERRIDES_FILENAME, apply_overrides, load_overrides
from .semver import calculate_new_version, parse_version

__all__ = [
    "DEFAULT_OVERRIDES_FILENAME",
    "BumpLevel",
    "CascadeResult",
    "ChangeRecord",
    "OverrideResult",
    "apply_overrides",
    "calculate_bundle_bumps",
    "calculate_module_bumps",
    "calculate_new_version",
    "calculate_ontology_bump",
    "calculate_version_cascade",
    "find_orphan_changes",
    "load_change_records",
    "load_overrides",
    "max_bump_type",
    "parse_version",
    "propagate_dependency_cascade",
]
