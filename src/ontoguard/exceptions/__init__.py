"""Exception hierarchy for ontoguard."""

from .base import OntoguardError
from .config import ConfigurationError, InvalidConfigError
from .index import EntityIndexError, UnknownEntityTypeError
from .versioning import (
    ChangeRecordError,
    InvalidBumpLevelError,
    OverrideFileError,
    VersioningError,
)

__all__ = [
    "OntoguardError",
    "ConfigurationError",
    "InvalidConfigError",
    "EntityIndexError",
    "UnknownEntityTypeError",
    "VersioningError",
    "OverrideFileError",
    "ChangeRecordError",
    "InvalidBumpLevelError",
]
