"""Manual per-module bump overrides.

The override file is a JSON object at the repository root mapping module id
to bump level. Overrides always win, even when they lower the calculated bump;
a lowered bump produces a warning so the downgrade is visible in review.
"""

import json
from pathlib import Path
from typing import Mapping

from ..exceptions import InvalidBumpLevelError, OverrideFileError
from ..logging_config import get_logger
from .bumps import BumpLevel, BumpLike
from .models import OverrideResult

logger = get_logger(__name__)

DEFAULT_OVERRIDES_FILENAME = "VERSION_OVERRIDES.json"


def load_overrides(path: Path = Path(DEFAULT_OVERRIDES_FILENAME)) -> dict[str, BumpLevel]:
    """Load the override table.

    A missing file is an empty table. Anything else that cannot be read as
    ``{module_id: "major"|"minor"|"patch"}`` raises OverrideFileError.
    """
    path = Path(path)
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise OverrideFileError(path, str(e)) from e

    if not isinstance(document, dict):
        raise OverrideFileError(path, f"expected a JSON object, got {type(document).__name__}")

    overrides: dict[str, BumpLevel] = {}
    for module_id, value in document.items():
        level = BumpLevel.coerce(value)
        if level is None:
            raise OverrideFileError(path, f"unknown bump level {value!r} for module {module_id}")
        overrides[module_id] = level

    logger.debug("Loaded %d override(s) from %s", len(overrides), path)
    return overrides


def apply_overrides(
    calculated_bumps: Mapping[str, BumpLevel], overrides: Mapping[str, BumpLike]
) -> OverrideResult:
    """Apply overrides on top of calculated module bumps.

    Returns a new map; ``calculated_bumps`` is left untouched.
    """
    bumps = dict(calculated_bumps)
    warnings: list[str] = []

    for module_id, value in overrides.items():
        override = BumpLevel.coerce(value)
        if override is None:
            raise InvalidBumpLevelError(module_id, value)

        calculated = bumps.get(module_id)
        if calculated is not None and override.priority < calculated.priority:
            message = f"Override downgrades {module_id} from {calculated} to {override}"
            logger.warning(message)
            warnings.append(message)

        bumps[module_id] = override

    return OverrideResult(bumps=bumps, warnings=warnings)
