from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sb.core.config import ConfigError
from sb.manifest.http import HttpError
from sb.platform.detection import UnsupportedPlatform
from sb.releases.errors import BadVersionString, FetchFailed, ReleaseNotFound
from sb.tools.cache import CacheError
from sb.tools.installer import InstallError


@dataclass(frozen=True, slots=True)
class MissingInput:
    name: str

    def __str__(self) -> str:
        return f"Input required and not supplied: {self.name}"


@dataclass(frozen=True, slots=True)
class DownloadFailed:
    error: HttpError

    def __str__(self) -> str:
        return f"Download failed: {self.error}"


@dataclass(frozen=True, slots=True)
class UnsupportedArchive:
    release: str

    def __str__(self) -> str:
        return f"Unknown extension on download: {self.release}"


@dataclass(frozen=True, slots=True)
class ExtractFailed:
    error: InstallError

    def __str__(self) -> str:
        return str(self.error)


@dataclass(frozen=True, slots=True)
class CacheFailed:
    error: CacheError

    def __str__(self) -> str:
        return str(self.error)


@dataclass(frozen=True, slots=True)
class OutputFailed:
    path: Path
    message: str

    def __str__(self) -> str:
        return f"Failed to write {self.path}: {self.message}"


SetupError = (
    BadVersionString
    | ReleaseNotFound
    | FetchFailed
    | UnsupportedPlatform
    | MissingInput
    | ConfigError
    | DownloadFailed
    | UnsupportedArchive
    | ExtractFailed
    | CacheFailed
    | OutputFailed
)
