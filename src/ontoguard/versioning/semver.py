"""Semantic version arithmetic."""

import re
from typing import Optional, Union

from .bumps import BumpLevel

_VERSION_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


def parse_version(version: Optional[str]) -> Optional[tuple[int, int, int]]:
    """Parse ``X.Y.Z``; None when it is not three non-negative integers."""
    if not isinstance(version, str):
        return None
    match = _VERSION_RE.match(version.strip())
    if match is None:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


def calculate_new_version(
    version: Optional[str], bump_type: Union[BumpLevel, str, None]
) -> Optional[str]:
    """Apply a bump to a version string.

    >>> calculate_new_version("1.2.3", "minor")
    '1.3.0'

    Returns None for an unparseable version or an unknown bump type.
    """
    parsed = parse_version(version)
    level = BumpLevel.coerce(bump_type)
    if parsed is None or level is None:
        return None

    major, minor, patch = parsed
    if level is BumpLevel.MAJOR:
        return f"{major + 1}.0.0"
    if level is BumpLevel.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{patch + 1}"
