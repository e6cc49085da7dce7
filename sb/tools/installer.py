"""Archive extraction.

This module provides an Installer that extracts a downloaded release:

- ``.zip`` with zipfile
- ``.tar.xz`` with tarfile (xz)
- ``.dmg`` with the ``7z`` executable (no Python reader exists for
  disk images)

Extraction of zip and tar archives refuses absolute paths, ``..``
components and links.
"""

from __future__ import annotations

import contextlib
import shutil
import stat
import tarfile
import zipfile
from dataclasses import dataclass
from functools import partial
from pathlib import Path, PurePosixPath
from typing import IO, TYPE_CHECKING

from sb.core.result import Err, Ok, Result
from sb.platform.files import remove_tree
from sb.platform.process import run, which
from sb.releases.artifacts import ArchiveFormat, archive_format

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

__all__ = ["Installer", "InstallResult", "InstallError", "SEVEN_ZIP_NAMES"]

# Executable names of 7-Zip across distributions (p7zip, 7-Zip, 7zz).
SEVEN_ZIP_NAMES = ("7z", "7zz", "7za")


@dataclass(frozen=True, slots=True)
class InstallError:
    """Extraction error details.

    Attributes:
        archive: Path to the archive that failed
        message: Human-readable error message
    """

    archive: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.archive}"


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Result of an extraction.

    Attributes:
        install_dir: Directory the archive was extracted into
        files_count: Number of files extracted (0 when 7z did the work)
    """

    install_dir: Path
    files_count: int


class Installer:
    """Archive extractor.

    Usage:
        installer = Installer()
        result = installer.install(archive_path, extract_dir)
        if is_ok(result):
            print(f"Extracted {result.value.files_count} files")
    """

    def __init__(self, find_executable: Callable[[str], Path | None] = which) -> None:
        self._which = find_executable

    def install(self, archive: Path, install_dir: Path) -> Result[InstallResult, InstallError]:
        """Extract archive into install_dir (replacing its contents).

        The format comes from the file extension, case-insensitively.
        """
        if not archive.exists():
            return Err(InstallError(archive=archive, message="Archive not found"))

        fmt = archive_format(archive.name.lower())
        if fmt is None:
            return Err(
                InstallError(archive=archive, message=f"Unsupported archive format: {archive.suffix}")
            )

        try:
            remove_tree(install_dir)
            install_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(InstallError(archive=archive, message=f"IO error: {e}"))

        match fmt:
            case ArchiveFormat.ZIP:
                return self._extract_zip(archive, install_dir)
            case ArchiveFormat.TAR_XZ:
                return self._extract_tar(archive, install_dir)
            case ArchiveFormat.DMG:
                return self._extract_7z(archive, install_dir)

    def seven_zip(self) -> Path | None:
        """Locate a 7-Zip executable, if any."""
        for name in SEVEN_ZIP_NAMES:
            found = self._which(name)
            if found is not None:
                return found
        return None

    def _extract_tar(self, archive: Path, install_dir: Path) -> Result[InstallResult, InstallError]:
        try:
            with tarfile.open(archive, "r:xz") as tar:
                count = _write_members(install_dir, _tar_members(tar))
        except tarfile.TarError as e:
            return Err(InstallError(archive=archive, message=f"Tar extraction failed: {e}"))
        except OSError as e:
            return Err(InstallError(archive=archive, message=f"IO error: {e}"))
        return Ok(InstallResult(install_dir=install_dir, files_count=count))

    def _extract_zip(self, archive: Path, install_dir: Path) -> Result[InstallResult, InstallError]:
        try:
            with zipfile.ZipFile(archive) as zf:
                count = _write_members(install_dir, _zip_members(zf))
        except zipfile.BadZipFile as e:
            return Err(InstallError(archive=archive, message=f"Invalid zip file: {e}"))
        except OSError as e:
            return Err(InstallError(archive=archive, message=f"IO error: {e}"))
        return Ok(InstallResult(install_dir=install_dir, files_count=count))

    def _extract_7z(self, archive: Path, install_dir: Path) -> Result[InstallResult, InstallError]:
        exe = self.seven_zip()
        if exe is None:
            return Err(
                InstallError(archive=archive, message="7z not found on PATH (needed for .dmg)")
            )

        result = run([str(exe), "x", "-y", f"-o{install_dir}", str(archive)], cwd=install_dir)
        if isinstance(result, Err):
            detail = result.error.detail() or str(result.error)
            return Err(InstallError(archive=archive, message=f"7z extraction failed: {detail}"))

        return Ok(InstallResult(install_dir=install_dir, files_count=0))


@dataclass(frozen=True, slots=True)
class _Member:
    """One regular file inside an archive."""

    name: str
    mode: int
    opener: Callable[[], IO[bytes] | None]


def _tar_members(tar: tarfile.TarFile) -> Iterator[_Member]:
    for info in tar.getmembers():
        # Links, devices and fifos are never written
        if info.isreg():
            yield _Member(info.name, info.mode & 0o777, partial(tar.extractfile, info))


def _zip_members(zf: zipfile.ZipFile) -> Iterator[_Member]:
    for info in zf.infolist():
        unix_mode = info.external_attr >> 16
        if info.is_dir() or stat.S_ISLNK(unix_mode):
            continue
        yield _Member(info.filename, unix_mode & 0o777, partial(zf.open, info))


def _member_path(root: Path, name: str) -> Path | None:
    """Where a member lands below root, or None for names that would escape it."""
    parts = PurePosixPath(name.replace("\\", "/")).parts
    if not parts or parts[0] == "/" or parts[0].endswith(":"):
        return None
    if any(part in {".", ".."} for part in parts):
        return None

    target = root.joinpath(*parts)
    try:
        inside = target.resolve().is_relative_to(root.resolve())
    except OSError:
        return None
    return target if inside else None


def _write_members(root: Path, members: Iterable[_Member]) -> int:
    """Copy members below root, skipping unsafe ones; return the count written."""
    written = 0
    for member in members:
        target = _member_path(root, member.name)
        if target is None:
            continue
        src = member.opener()
        if src is None:
            continue

        target.parent.mkdir(parents=True, exist_ok=True)
        with src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)
        if member.mode:
            with contextlib.suppress(OSError):
                target.chmod(member.mode)
        written += 1
    return written
