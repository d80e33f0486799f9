"""Bump levels and the single comparison primitive used at every level."""

from enum import Enum
from functools import total_ordering
from typing import Iterable, Optional, Union


@total_ordering
class BumpLevel(Enum):
    """Semantic-version bump, ordered patch < minor < major."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]

    @classmethod
    def coerce(cls, value: Union["BumpLevel", str, None]) -> Optional["BumpLevel"]:
        """Return the member for ``value`` (member or string), else None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None

    def __lt__(self, other: "BumpLevel") -> bool:
        if not isinstance(other, BumpLevel):
            return NotImplemented
        return self.priority < other.priority

    def __str__(self) -> str:
        return self.value


_PRIORITY = {BumpLevel.PATCH: 1, BumpLevel.MINOR: 2, BumpLevel.MAJOR: 3}

BumpLike = Union[BumpLevel, str]


def max_bump_type(bumps: Iterable[BumpLike]) -> BumpLevel:
    """Return the highest bump present (major > minor > patch).

    Empty input gives ``patch``. Values that are not a known bump level are
    ignored.

    >>> max_bump_type(["patch", "major", "minor"])
    <BumpLevel.MAJOR: 'major'>
    >>> max_bump_type([])
    <BumpLevel.PATCH: 'patch'>
    """
    highest = BumpLevel.PATCH
    for bump in bumps:
        level = BumpLevel.coerce(bump)
        if level is not None and level.priority > highest.priority:
            highest = level
    return highest
