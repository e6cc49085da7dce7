"""Blender release mirror listings.

The mirror is two levels deep:

- the root listing names one ``Blender{major}.{minor}/`` directory per
  minor version;
- each minor directory lists the release artifacts
  (``blender-{X.Y.Z}-{os}-{arch}.{ext}``) plus checksums and notes.

All functions take an HttpClient parameter for testability.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sb.core.result import Err, Ok, Result
from sb.manifest.http import HttpError
from sb.manifest.listing import LineTokenizer

if TYPE_CHECKING:
    from sb.manifest.http import HttpClient

__all__ = [
    "ARCHIVE_SUFFIXES",
    "ReleaseCache",
    "ReleaseLister",
    "list_minor_versions",
    "minor_manifest_url",
]

ARCHIVE_SUFFIXES = (".zip", ".tar.xz", ".dmg")

# Single-digit major/minor only: that is what the listing format carries.
_MINOR_TOKENIZER = LineTokenizer(pattern=re.compile(r"Blender\d\.\d"), start=">", end="/<")
_RELEASE_TOKENIZER = LineTokenizer(pattern=re.compile(r"blender-\d"), start=">", end="<")

# Pre-3.x lines predate the current artifact naming.
_LEGACY_PREFIXES = ("1.", "2.")

type ReleaseCache = dict[str, list[str]]


def minor_manifest_url(base_url: str, minor: str) -> str:
    """URL of the listing for one minor version."""
    return f"{base_url.rstrip('/')}/Blender{minor}"


def list_minor_versions(http: HttpClient, base_url: str) -> Result[list[str], HttpError]:
    """Fetch the root listing and return the published minor versions.

    Beta directories and 1.x/2.x lines are excluded. Order is listing
    order; use sort_minor_versions() for precedence.

    Args:
        http: HTTP client to use
        base_url: Root listing URL

    Returns:
        Ok with ``"X.Y"`` strings, or Err with HttpError
    """
    result = http.get_text(base_url)
    if isinstance(result, Err):
        return result

    versions: list[str] = []
    for entry in _MINOR_TOKENIZER.entries(result.value):
        version = entry.replace("Blender", "", 1)
        if "beta" in version or version.startswith(_LEGACY_PREFIXES):
            continue
        versions.append(version)
    return Ok(versions)


class ReleaseLister:
    """Lists release artifacts per minor version, memoized.

    Each instance owns its cache, so the memoization lifetime is the
    lifetime of the lister. Build one per resolution; two resolutions
    running at once must not share an instance.

    Usage:
        lister = ReleaseLister(http, base_url)
        result = lister.releases("4.0")
        if is_ok(result):
            print(result.value)
    """

    def __init__(self, http: HttpClient, base_url: str) -> None:
        self._http = http
        self._base_url = base_url
        self._cache: ReleaseCache = {}

    def releases(self, minor: str) -> Result[list[str], HttpError]:
        """Return the artifact filenames published for ``minor``.

        A cached entry is returned without network access. Only successful
        fetches are cached; an empty listing is a successful fetch.
        """
        cached = self._cache.get(minor)
        if cached is not None:
            return Ok(list(cached))

        result = self._http.get_text(minor_manifest_url(self._base_url, minor))
        if isinstance(result, Err):
            return result

        releases = [
            name
            for name in _RELEASE_TOKENIZER.entries(result.value)
            if name.endswith(ARCHIVE_SUFFIXES)
        ]
        self._cache[minor] = releases
        return Ok(list(releases))
