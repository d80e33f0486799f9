"""Entity index construction from a repository checkout.

Scans ``<root>/<entity_type>/**/*.json`` for each known entity type and keys
each document by its ``id`` field. Documents that fail to parse or carry no
``id`` are skipped: reporting those is the schema validator's job.
"""

import fnmatch
import json
from pathlib import Path
from typing import Optional, Sequence

from ..logging_config import get_logger
from .models import ENTITY_TYPES, Entity, EntityIndex

logger = get_logger(__name__)

SCHEMA_FILENAME = "_schema.json"


def _is_excluded(relative_path: str, exclude_patterns: Sequence[str]) -> bool:
    parts = relative_path.split("/")
    if any(part.startswith(".") for part in parts):
        return True
    if parts[-1] == SCHEMA_FILENAME:
        return True
    return any(fnmatch.fnmatch(relative_path, pattern) for pattern in exclude_patterns)


def discover_entity_files(root: Path, exclude_patterns: Sequence[str] = ()) -> list[str]:
    """Return entity file paths relative to ``root``, sorted for stable output."""
    root = Path(root)
    found: list[str] = []
    for entity_type in ENTITY_TYPES:
        type_dir = root / entity_type
        if not type_dir.is_dir():
            continue
        for path in type_dir.rglob("*.json"):
            if not path.is_file():
                continue
            relative = path.relative_to(root).as_posix()
            if _is_excluded(relative, exclude_patterns):
                logger.debug("Skipped (excluded): %s", relative)
                continue
            found.append(relative)
    return sorted(found)


def load_entity_index(
    root: Path, exclude_patterns: Optional[Sequence[str]] = None
) -> EntityIndex:
    """Build an EntityIndex from every entity document under ``root``."""
    root = Path(root)
    index = EntityIndex()
    skipped = 0

    for relative in discover_entity_files(root, exclude_patterns or ()):
        entity_type = relative.split("/", 1)[0]
        try:
            with open(root / relative, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.debug("Skipped (unreadable): %s: %s", relative, e)
            skipped += 1
            continue

        if not isinstance(data, dict) or not data.get("id"):
            logger.debug("Skipped (no id): %s", relative)
            skipped += 1
            continue

        entity = Entity(entity_type=entity_type, id=str(data["id"]), data=data, file_path=relative)
        previous = index.add(entity)
        if previous is not None:
            logger.warning(
                "Duplicate %s id %r in %s (replaces %s)",
                entity_type,
                entity.id,
                relative,
                previous.file_path,
            )

    logger.debug("Indexed %d entities under %s (%d skipped)", len(index), root, skipped)
    return index
