"""Versioning exceptions: override tables and change records."""

from pathlib import Path
from typing import Any

from .base import OntoguardError


class VersioningError(OntoguardError):
    """Base class for version cascade errors."""

    pass


class OverrideFileError(VersioningError):
    """Raised when the version override file cannot be loaded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Failed to parse {Path(path).name}: {reason}",
            details={"path": str(path)},
        )
        self.path = Path(path)
        self.reason = reason


class ChangeRecordError(VersioningError):
    """Raised when a change record is malformed."""

    def __init__(self, record: Any, reason: str):
        super().__init__(
            f"Invalid change record: {reason}",
            details={"record": repr(record)},
        )
        self.record = record
        self.reason = reason


class InvalidBumpLevelError(VersioningError):
    """Raised when a module is given a bump level other than major/minor/patch."""

    def __init__(self, module_id: str, value: Any):
        super().__init__(
            f"Unknown bump level {value!r} for module {module_id}",
            details={"module": module_id},
        )
        self.module_id = module_id
        self.value = value
