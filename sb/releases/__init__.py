"""Release resolution against the Blender mirror."""

from .artifacts import ArchiveFormat, archive_format, download_url, release_minor, release_version
from .errors import BadVersionString, FetchFailed, ReleaseNotFound, ResolveError
from .resolver import ReleaseResolver, resolve_release
from .versions import (
    filter_releases,
    parse_specifier,
    sort_minor_versions,
    sort_releases,
)

__all__ = [
    # artifacts
    "ArchiveFormat",
    "archive_format",
    "download_url",
    "release_minor",
    "release_version",
    # errors
    "BadVersionString",
    "FetchFailed",
    "ReleaseNotFound",
    "ResolveError",
    # resolver
    "ReleaseResolver",
    "resolve_release",
    # versions
    "filter_releases",
    "parse_specifier",
    "sort_minor_versions",
    "sort_releases",
]
