from __future__ import annotations

import contextlib
from dataclasses import dataclass
from pathlib import Path

from sb.core.config import Config
from sb.core.result import Err, Ok, Result
from sb.manifest.http import HttpClient, HttpError, RealHttpClient
from sb.manifest.index import list_minor_versions
from sb.output.console import ConsoleProtocol
from sb.platform.detection import PlatformTarget
from sb.platform.files import remove_tree
from sb.platform.paths import temp_dir, user_cache_dir
from sb.releases.artifacts import archive_format, download_url, release_prefix, release_version
from sb.releases.errors import ResolveError
from sb.releases.resolver import ReleaseResolver
from sb.services.setup_errors import (
    CacheFailed,
    DownloadFailed,
    ExtractFailed,
    SetupError,
    UnsupportedArchive,
)
from sb.tools.cache import ToolCache
from sb.tools.download import DownloadProgress, Downloader
from sb.tools.installer import Installer

TOOL_NAME = "blender"


@dataclass(frozen=True, slots=True)
class SetupPaths:
    cache_root: Path
    work_dir: Path

    @classmethod
    def from_config(cls, config: Config) -> SetupPaths:
        return cls(
            cache_root=config.cache.dir or user_cache_dir() / "tools",
            work_dir=(config.cache.temp_dir or temp_dir()) / "setup-blender",
        )

    @property
    def downloads(self) -> Path:
        return self.work_dir / "downloads"

    @property
    def extract(self) -> Path:
        return self.work_dir / "extract"


@dataclass(frozen=True, slots=True)
class SetupResult:
    """Outcome of a successful setup.

    Attributes:
        release: Resolved artifact filename
        version: Embedded ``X.Y.Z`` version
        path: Cached Blender directory
        from_cache: True if no download was needed
    """

    release: str
    version: str
    path: Path
    from_cache: bool


class SetupService:
    def __init__(
        self,
        *,
        config: Config,
        console: ConsoleProtocol,
        http: HttpClient | None = None,
        installer: Installer | None = None,
    ) -> None:
        self._config = config
        self._console = console
        self._http = http or RealHttpClient(
            timeout=config.http.timeout, user_agent=config.http.user_agent
        )
        self._installer = installer or Installer()
        self._paths = SetupPaths.from_config(config)
        self._cache = ToolCache(self._paths.cache_root)

    @property
    def paths(self) -> SetupPaths:
        return self._paths

    @property
    def cache(self) -> ToolCache:
        return self._cache

    def resolver(self) -> ReleaseResolver:
        """A resolver with its own, empty listing cache."""
        return ReleaseResolver(self._http, self._config.mirror.manifest_url)

    def resolve(self, specifier: str, target: PlatformTarget) -> Result[str, ResolveError]:
        self._console.info(f'Finding Blender version matching "{specifier}" for {target}')
        return self.resolver().resolve(specifier, target.os, target.arch)

    def setup(self, specifier: str, target: PlatformTarget) -> Result[SetupResult, SetupError]:
        """Resolve, then reuse the cached tree or download, extract and cache it."""
        resolved = self.resolve(specifier, target)
        if isinstance(resolved, Err):
            return resolved

        release = resolved.value
        version = release_version(release)

        cached = self._cache.find(TOOL_NAME, version, target.arch)
        if cached is not None:
            self._console.info(f"Using cached {version}")
            return Ok(SetupResult(release=release, version=version, path=cached, from_cache=True))

        self._console.info(f"Found Blender release: {release}")
        if archive_format(release) is None:
            return Err(UnsupportedArchive(release=release))

        url = download_url(self._config.mirror.download_url, release)
        self._console.info(f"Downloading Blender release from {url}")
        downloader = Downloader(self._http, self._paths.downloads)
        downloaded = downloader.download(url, progress=DownloadProgress(self._console, release))
        if isinstance(downloaded, Err):
            return downloaded.map_err(DownloadFailed)
        archive = downloaded.value.path
        self._console.info(f"Download saved to {archive}")

        prefix = release_prefix(version, target.os, target.arch)
        extract_dir = self._paths.extract / prefix
        extracted = self._installer.install(archive, extract_dir)
        if isinstance(extracted, Err):
            # A corrupt archive must not be reused by the next run
            with contextlib.suppress(OSError):
                remove_tree(archive.parent)
            return extracted.map_err(ExtractFailed)
        self._console.info(f"Extracted Blender release to {extract_dir}")

        # Archives carry a single top-level directory named like the release;
        # disk images do not, so their whole extraction is cached.
        source = extract_dir / prefix
        if not source.is_dir():
            source = extract_dir

        stored = self._cache.cache_dir(source, TOOL_NAME, version, target.arch)
        with contextlib.suppress(OSError):
            remove_tree(extract_dir)
        if isinstance(stored, Err):
            return stored.map_err(CacheFailed)

        with contextlib.suppress(OSError):
            remove_tree(archive.parent)
        self._console.success(f"Blender {version} cached at {stored.value}")
        return Ok(
            SetupResult(release=release, version=version, path=stored.value, from_cache=False)
        )

    def list_releases(self, minor: str) -> Result[list[str], HttpError]:
        return self.resolver().lister.releases(minor)

    def list_minor_versions(self) -> Result[list[str], HttpError]:
        return list_minor_versions(self._http, self._config.mirror.manifest_url)
