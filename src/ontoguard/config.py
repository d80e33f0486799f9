"""Configuration loading and management for ontoguard.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in OntoguardConfig)
    2. Global config (~/.ontoguard.toml)
    3. Project config (<root>/ontoguard.toml)
    4. Explicit config file
    5. Environment variables (ONTOGUARD_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(Path("."), verbose=True)
    >>> config.verbosity
    'verbose'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, Union, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

Verbosity = Literal["quiet", "normal", "verbose"]

CONFIG_FILENAME = "ontoguard.toml"
ENV_PREFIX = "ONTOGUARD_"


@dataclass(frozen=True)
class OntoguardConfig:
    """Settings for one validation or cascade run.

    Attributes:
        overrides_file: Override table, relative to the repository root
        version_file: Ontology VERSION file, relative to the repository root
        exclude_patterns: Glob patterns (relative to the root) of entity
            files to leave out of the index
        fail_on_warnings: Treat validation warnings as failures
        verbosity: Logging verbosity level
        log_file: Optional file that receives a copy of the log output
    """

    overrides_file: str = "VERSION_OVERRIDES.json"
    version_file: str = "VERSION"
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "*/versions/*",
            "node_modules/*",
            "*/node_modules/*",
        ]
    )
    fail_on_warnings: bool = False
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.overrides_file:
            raise InvalidConfigError("overrides_file", self.overrides_file, "must not be empty")
        if not self.version_file:
            raise InvalidConfigError("version_file", self.version_file, "must not be empty")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )
        if not all(isinstance(p, str) for p in self.exclude_patterns):
            raise InvalidConfigError(
                "exclude_patterns", self.exclude_patterns, "expected a list of strings"
            )

    def overrides_path(self, root: Path) -> Path:
        return Path(root) / self.overrides_file

    def version_path(self, root: Path) -> Path:
        return Path(root) / self.version_file


def load_config(
    root: Path = Path("."), config_file: Optional[Path] = None, **overrides: Any
) -> OntoguardConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        root: Repository root, searched for ontoguard.toml
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``verbose``
            and ``quiet`` booleans are folded into ``verbosity``

    Raises:
        ConfigurationError: If a config file is unreadable or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path(root) / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = OntoguardConfig.__dataclass_fields__
    for key in [k for k in merged if k not in known]:
        logger.warning("Ignoring unknown configuration key %r", key)
        del merged[key]

    return OntoguardConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ONTOGUARD_* environment variables.

    Supported environment variables:
        ONTOGUARD_OVERRIDES_FILE: str
        ONTOGUARD_VERSION_FILE: str
        ONTOGUARD_FAIL_ON_WARNINGS: bool (true/false/1/0)
        ONTOGUARD_VERBOSITY: quiet/normal/verbose
        ONTOGUARD_LOG_FILE: str
    """
    type_hints = get_type_hints(OntoguardConfig)
    result: dict[str, Any] = {}

    for field_name in OntoguardConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints.get(field_name))
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed in a single variable
    (lists).
    """
    origin = getattr(type_hint, "__origin__", None)
    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    if origin is Union and str in type_hint.__args__:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file, accepting either top-level keys or a [ontoguard] table."""
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e

    section = data.get("ontoguard")
    if isinstance(section, dict):
        return dict(section)
    return data
