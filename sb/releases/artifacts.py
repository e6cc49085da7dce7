"""Helpers over release artifact filenames.

A release is kept as its filename, ``blender-{X.Y.Z}-{os}-{arch}.{ext}``.
These helpers derive what the download layer needs from it.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ArchiveFormat",
    "archive_format",
    "download_url",
    "release_minor",
    "release_prefix",
    "release_version",
]


class ArchiveFormat(Enum):
    ZIP = ".zip"
    TAR_XZ = ".tar.xz"
    DMG = ".dmg"

    def __str__(self) -> str:
        return self.value.lstrip(".")


def archive_format(release: str) -> ArchiveFormat | None:
    """Archive format implied by the extension, or None if unknown."""
    for fmt in ArchiveFormat:
        if release.endswith(fmt.value):
            return fmt
    return None


def release_version(release: str) -> str:
    """Embedded ``X.Y.Z`` version (text between the first two hyphens)."""
    fields = release.split("-")
    return fields[1] if len(fields) > 1 else ""


def release_minor(release: str) -> str:
    """``X.Y`` directory the release is published under."""
    parts = release_version(release).split(".")
    return ".".join(parts[:2])


def release_prefix(version: str, os_name: str, arch: str) -> str:
    """Filename prefix of an exact release: ``blender-{version}-{os}-{arch}``.

    Also the name of the top-level directory inside the archive.
    """
    return f"blender-{version}-{os_name}-{arch}"


def download_url(base_url: str, release: str) -> str:
    """``{base}/Blender{X.Y}/{filename}``."""
    return f"{base_url.rstrip('/')}/Blender{release_minor(release)}/{release}"
