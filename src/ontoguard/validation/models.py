"""Validation result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorType(Enum):
    """Kinds of structural errors a validation pass reports."""

    SELF_REFERENCE = "self-reference"
    MISSING_REFERENCE = "missing-reference"
    SCOPE_VIOLATION = "scope-violation"
    DEPENDENCY_CYCLE = "dependency-cycle"


@dataclass
class ValidationIssue:
    """One structural error, attributed to the file that declares it."""

    file: str
    type: ErrorType
    message: str
    entity_type: str = ""
    entity_id: str = ""
    field: str = ""
    target: str = ""
    source_module: Optional[str] = None
    target_module: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "file": self.file,
            "type": self.type.value,
            "message": self.message,
        }
        for key in ("entity_type", "entity_id", "field", "target"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.source_module is not None:
            data["source_module"] = self.source_module
        if self.target_module is not None:
            data["target_module"] = self.target_module
        return data


@dataclass
class ValidationReport:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def extend(self, other: "ValidationReport") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def errors_by_file(self) -> dict[str, list[ValidationIssue]]:
        grouped: dict[str, list[ValidationIssue]] = {}
        for error in self.errors:
            grouped.setdefault(error.file, []).append(error)
        return grouped

    def count(self, error_type: ErrorType) -> int:
        return sum(1 for e in self.errors if e.type is error_type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }
