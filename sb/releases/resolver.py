"""Release resolution: version specifier + platform -> artifact filename.

Resolution walks the mirror in dependency order, one fetch at a time:

1. ``latest``: list minor versions, take the newest. If it has no
   artifacts yet (listing published before the files), fall back once to
   the second-newest. Only one step back is ever taken.
2. ``X.Y``: list that minor's artifacts, keep the target's, newest first.
3. ``X.Y.Z``: list ``X.Y``'s artifacts, take the one whose name starts
   with ``blender-X.Y.Z-{os}-{arch}``.

Malformed specifiers fail before any network access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sb.core.result import Err, Ok, Result
from sb.manifest.index import ReleaseLister, list_minor_versions
from sb.releases.artifacts import release_prefix
from sb.releases.errors import FetchFailed, ReleaseNotFound, ResolveError
from sb.releases.versions import (
    LATEST,
    Exact,
    Latest,
    Minor,
    filter_releases,
    parse_specifier,
    sort_minor_versions,
    sort_releases,
)

if TYPE_CHECKING:
    from sb.manifest.http import HttpClient

__all__ = ["ReleaseResolver", "resolve_release"]


class ReleaseResolver:
    """Resolves specifiers against one mirror.

    The resolver owns a ReleaseLister, so minor-version listings fetched
    during one resolve() are reused by later steps (and by later calls on
    the same resolver).

    Usage:
        resolver = ReleaseResolver(RealHttpClient(), DEFAULT_MANIFEST_URL)
        match resolver.resolve("4.0", "linux", "x64"):
            case Ok(release):
                print(release)  # blender-4.0.2-linux-x64.tar.xz
            case Err(error):
                print(error)
    """

    def __init__(
        self,
        http: HttpClient,
        base_url: str,
        *,
        lister: ReleaseLister | None = None,
    ) -> None:
        self._http = http
        self._base_url = base_url
        self._lister = lister if lister is not None else ReleaseLister(http, base_url)

    @property
    def lister(self) -> ReleaseLister:
        return self._lister

    def latest_minor(self) -> Result[str | None, FetchFailed]:
        """Newest minor version that has artifacts, with one-step fallback.

        Returns Ok(None) when the root listing has no minor versions.
        """
        minors = list_minor_versions(self._http, self._base_url)
        if isinstance(minors, Err):
            return minors.map_err(FetchFailed)

        ordered = sort_minor_versions(minors.value)
        if not ordered:
            return Ok(None)

        candidate = ordered[0]
        releases = self._lister.releases(candidate)
        if isinstance(releases, Err):
            return releases.map_err(FetchFailed)

        if not releases.value and len(ordered) > 1:
            candidate = ordered[1]
            fallback = self._lister.releases(candidate)
            if isinstance(fallback, Err):
                return fallback.map_err(FetchFailed)

        return Ok(candidate)

    def resolve(self, specifier: str, os_name: str, arch: str) -> Result[str, ResolveError]:
        """Resolve a specifier to a single release filename.

        Args:
            specifier: ``latest``, ``X.Y`` or ``X.Y.Z``
            os_name: ``linux``, ``macos`` or ``windows``
            arch: Architecture as it appears in filenames (e.g. ``x64``)

        Returns:
            Ok with the filename, or Err with BadVersionString,
            ReleaseNotFound or FetchFailed
        """
        parsed = parse_specifier(specifier)
        if isinstance(parsed, Err):
            return parsed

        match parsed.value:
            case Latest():
                latest = self.latest_minor()
                if isinstance(latest, Err):
                    return latest
                if latest.value is None:
                    return Err(ReleaseNotFound(version=LATEST, os=os_name, arch=arch))
                version = latest.value
                found = self._newest_for_minor(version, os_name, arch)
            case Minor() as minor:
                version = str(minor)
                found = self._newest_for_minor(version, os_name, arch)
            case Exact() as exact:
                version = str(exact)
                found = self._exact(exact, os_name, arch)

        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(ReleaseNotFound(version=version, os=os_name, arch=arch))
        return Ok(found.value)

    def _newest_for_minor(
        self, minor: str, os_name: str, arch: str
    ) -> Result[str | None, FetchFailed]:
        releases = self._lister.releases(minor)
        if isinstance(releases, Err):
            return releases.map_err(FetchFailed)

        ordered = sort_releases(filter_releases(releases.value, os_name, arch))
        return Ok(ordered[0] if ordered else None)

    def _exact(self, exact: Exact, os_name: str, arch: str) -> Result[str | None, FetchFailed]:
        releases = self._lister.releases(exact.minor_version)
        if isinstance(releases, Err):
            return releases.map_err(FetchFailed)

        prefix = release_prefix(str(exact), os_name, arch)
        return Ok(next((r for r in releases.value if r.startswith(prefix)), None))


def resolve_release(
    specifier: str,
    os_name: str,
    arch: str,
    *,
    http: HttpClient,
    base_url: str,
) -> Result[str, ResolveError]:
    """One-shot resolution with a fresh listing cache."""
    return ReleaseResolver(http, base_url).resolve(specifier, os_name, arch)
