"""Versioning data models: change records and cascade results."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..exceptions import ChangeRecordError
from ..graph.models import CycleDetected
from .bumps import BumpLevel


def split_entity_path(file: str) -> tuple[str, str]:
    """Split an entity file path into (entity_type, entity_id).

    The type is the first path segment; the id is the rest of the path minus
    ``.json``, so nested files keep their sub-path
    (``templates/Property/Page.json`` gives ``Property/Page``).
    """
    entity_type, _, rest = file.replace("\\", "/").partition("/")
    if rest.endswith(".json"):
        rest = rest[: -len(".json")]
    return entity_type, rest


@dataclass(frozen=True)
class ChangeRecord:
    """One changed entity file, already classified by the change detector."""

    file: str
    entity_type: str
    change_type: BumpLevel

    @property
    def path_entity_type(self) -> str:
        return split_entity_path(self.file)[0]

    @property
    def entity_id(self) -> str:
        return split_entity_path(self.file)[1]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChangeRecord":
        """Parse a change record; accepts camelCase or snake_case keys."""
        if not isinstance(data, dict):
            raise ChangeRecordError(data, "expected an object")
        file = data.get("file")
        if not isinstance(file, str) or not file:
            raise ChangeRecordError(data, "missing 'file'")
        raw_change = data.get("changeType", data.get("change_type"))
        change_type = BumpLevel.coerce(raw_change)
        if change_type is None:
            raise ChangeRecordError(data, f"unknown change type {raw_change!r}")
        entity_type = data.get("entityType", data.get("entity_type"))
        return cls(
            file=file,
            entity_type=entity_type or split_entity_path(file)[0],
            change_type=change_type,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "file": self.file,
            "entityType": self.entity_type,
            "changeType": self.change_type.value,
        }


def load_change_records(path: Path) -> list[ChangeRecord]:
    """Read change records from a JSON file.

    The document is either a list of records or an object with a
    ``changes`` list.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ChangeRecordError(str(path), f"invalid JSON: {e}") from e

    if isinstance(document, dict):
        document = document.get("changes", [])
    if not isinstance(document, list):
        raise ChangeRecordError(str(path), "expected a list of change records")
    return [ChangeRecord.from_dict(item) for item in document]


@dataclass
class OverrideResult:
    bumps: dict[str, BumpLevel] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


@dataclass
class CascadeResult:
    """Bump decisions at every aggregation level for one change set."""

    module_bumps: dict[str, BumpLevel] = field(default_factory=dict)
    bundle_bumps: dict[str, BumpLevel] = field(default_factory=dict)
    ontology_bump: BumpLevel = BumpLevel.PATCH
    orphan_changes: list[ChangeRecord] = field(default_factory=list)
    changes: list[ChangeRecord] = field(default_factory=list)
    override_warnings: list[str] = field(default_factory=list)

    # Set when a module dependency cycle stopped propagation.
    cycle: Optional[CycleDetected] = None

    @property
    def cascade_skipped(self) -> bool:
        return self.cycle is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "moduleBumps": {k: v.value for k, v in self.module_bumps.items()},
            "bundleBumps": {k: v.value for k, v in self.bundle_bumps.items()},
            "ontologyBump": self.ontology_bump.value,
            "orphanChanges": [c.to_dict() for c in self.orphan_changes],
            "overrideWarnings": list(self.override_warnings),
            "cascadeSkipped": str(self.cycle) if self.cycle is not None else None,
        }
