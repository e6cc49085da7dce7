"""Version specifiers, ordering and platform filtering.

Ordering uses fixed-width decimal weighting, not tuple comparison:

- minor versions: ``major * 100 + minor``
- releases: ``major * 1000 + minor * 100 + patch``

so ``3.3.16 > 3.3.15 > 3.3.2`` (numeric, not lexicographic). Components of
100 or more overflow into the neighbouring weight and corrupt the order;
the mirror has never published such versions.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sb.core.result import Err, Ok, Result
from sb.releases.errors import BadVersionString

__all__ = [
    "LATEST",
    "Exact",
    "Latest",
    "Minor",
    "VersionSpecifier",
    "filter_releases",
    "minor_version_key",
    "parse_specifier",
    "release_version_key",
    "sort_minor_versions",
    "sort_releases",
]

LATEST = "latest"


@dataclass(frozen=True, slots=True)
class Latest:
    def __str__(self) -> str:
        return LATEST


@dataclass(frozen=True, slots=True)
class Minor:
    """``X.Y``; components are kept as written ("4.00" lists ``Blender4.00``)."""

    major: str
    minor: str

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True, slots=True)
class Exact:
    """``X.Y.Z``; matched as a literal filename prefix."""

    major: str
    minor: str
    patch: str

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def minor_version(self) -> str:
        return f"{self.major}.{self.minor}"


type VersionSpecifier = Latest | Minor | Exact


def _is_number(part: str) -> bool:
    return part.isascii() and part.isdigit()


def parse_specifier(text: str) -> Result[VersionSpecifier, BadVersionString]:
    """Parse ``latest``, ``X.Y`` or ``X.Y.Z``.

    Anything else, including non-numeric components, is a
    BadVersionString carrying the input verbatim. Numeric components are
    not normalised: "3.3.015" looks for ``blender-3.3.015-...`` and finds
    nothing.
    """
    value = text.strip()
    if value == LATEST:
        return Ok(Latest())

    parts = value.split(".")
    if len(parts) not in (2, 3) or not all(_is_number(p) for p in parts):
        return Err(BadVersionString(specifier=text))

    if len(parts) == 2:
        return Ok(Minor(parts[0], parts[1]))
    return Ok(Exact(parts[0], parts[1], parts[2]))


def _leading_int(part: str) -> int:
    """Integer prefix of a version component ("2rc1" -> 2, "" -> 0)."""
    digits = ""
    for ch in part:
        if not ch.isdigit():
            break
        digits += ch
    return int(digits) if digits else 0


def minor_version_key(version: str) -> int:
    parts = version.split(".")
    major = _leading_int(parts[0])
    minor = _leading_int(parts[1]) if len(parts) > 1 else 0
    return major * 100 + minor


def release_version_key(release: str) -> int:
    """Sort key from the version field (between the first two hyphens)."""
    fields = release.split("-")
    version = fields[1] if len(fields) > 1 else ""
    parts = [_leading_int(p) for p in version.split(".")]
    parts += [0] * (3 - len(parts))
    return parts[0] * 1000 + parts[1] * 100 + parts[2]


def sort_minor_versions(versions: Iterable[str]) -> list[str]:
    """Newest minor version first. Returns a new list."""
    return sorted(versions, key=minor_version_key, reverse=True)


def sort_releases(releases: Iterable[str]) -> list[str]:
    """Newest release first. Returns a new list."""
    return sorted(releases, key=release_version_key, reverse=True)


def filter_releases(releases: Iterable[str], os_name: str, arch: str) -> list[str]:
    """Releases whose name contains ``-{os}-{arch}``, order preserved.

    This is a plain substring test: an arch that prefixes another arch's
    identifier would match both.
    """
    needle = f"-{os_name}-{arch}"
    return [r for r in releases if needle in r]
