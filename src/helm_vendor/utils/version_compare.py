"""Semver value type for chart version directories."""

from __future__ import annotations

import functools
from dataclasses import dataclass

from semver import Version


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class ChartVersion:
    """A chart version directory name parsed as SemVer 2.0.0.

    Ordering follows SemVer precedence (major, minor, patch, pre-release).
    Build metadata does not take part in precedence, so it is compared
    lexically next, and the raw directory name last; two distinct sibling
    directories such as ``1.0.0`` and ``v1.0.0`` therefore never compare
    equal. ``raw`` keeps the string exactly as it appears on disk.
    """

    raw: str
    semver: Version

    @classmethod
    def parse(cls, raw: str) -> ChartVersion:
        """Parse ``raw``, accepting one leading ``v``. Raises ValueError."""
        text = raw.strip()
        if text.startswith("v"):
            text = text[1:]
        try:
            return cls(raw=raw, semver=Version.parse(text))
        except (ValueError, TypeError) as e:
            raise ValueError(f"{raw!r} is not a valid semantic version: {e}") from e

    @property
    def build(self) -> str:
        return self.semver.build or ""

    def _key(self) -> tuple[Version, str, str]:
        return (self.semver, self.build, self.raw)

    def precedes(self, other: ChartVersion) -> bool:
        """True when ``self`` is a strictly lower release, whatever the directory spelling."""
        return (self.semver, self.build) < (other.semver, other.build)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChartVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: ChartVersion) -> bool:
        if not isinstance(other, ChartVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash((self.semver.to_tuple()[:4], self.build, self.raw))

    def __str__(self) -> str:
        return self.raw


def parse_version(v: str) -> ChartVersion | None:
    """Parse a version string, returning None on failure."""
    try:
        return ChartVersion.parse(v)
    except ValueError:
        return None

