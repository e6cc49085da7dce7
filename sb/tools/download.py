"""Release archive downloads.

Each URL gets its own directory under the scratch root, named by a short
digest of the URL, and the archive keeps its release filename inside it
(extraction dispatches on that name's extension):

    {dest_dir}/{digest}/blender-4.0.2-linux-x64.tar.xz

Bytes go to ``<filename>.part`` first and are renamed when the transfer
completes, so a file under the final name is whole and a rerun reuses it.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from sb.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable

    from sb.manifest.http import HttpClient, HttpError
    from sb.output.console import ConsoleProtocol

__all__ = ["DownloadProgress", "DownloadResult", "Downloader"]


@dataclass(frozen=True, slots=True)
class DownloadResult:
    path: Path
    reused: bool
    size: int


class DownloadProgress:
    """Reports a transfer at every ``step`` percent through the console.

    Usable directly as the ``progress`` callback. Nothing is reported when
    the server does not announce a size.
    """

    def __init__(self, console: ConsoleProtocol, label: str, *, step: int = 25) -> None:
        self._console = console
        self._label = label
        self._step = step
        self._next = step

    def __call__(self, received: int, total: int) -> None:
        if total <= 0:
            return
        percent = received * 100 // total
        if percent < self._next:
            return
        self._console.info(f"{self._label}: {percent}% of {total // (1024 * 1024)} MiB")
        while self._next <= percent:
            self._next += self._step


class Downloader:
    """Downloads release archives below dest_dir.

    Usage:
        downloader = Downloader(http, scratch / "downloads")
        match downloader.download(url):
            case Ok(result):
                installer.install(result.path, extract_dir)
    """

    def __init__(self, http: HttpClient, dest_dir: Path) -> None:
        self._http = http
        self._dest_dir = dest_dir

    def path_for(self, url: str) -> Path:
        """Where url is stored: ``{dest_dir}/{digest}/{filename}``."""
        filename = PurePosixPath(unquote(urlparse(url).path)).name or "download"
        digest = hashlib.sha256(url.encode()).hexdigest()[:12]
        return self._dest_dir / digest / filename

    def download(
        self,
        url: str,
        *,
        force: bool = False,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[DownloadResult, HttpError]:
        """Fetch url unless a complete copy is already on disk (or force).

        A failed transfer leaves no file behind.
        """
        path = self.path_for(url)
        if path.is_file() and not force:
            return Ok(DownloadResult(path=path, reused=True, size=path.stat().st_size))

        part = path.with_name(f"{path.name}.part")
        fetched = self._http.download(url, part, progress)
        if isinstance(fetched, Err):
            part.unlink(missing_ok=True)
            return fetched

        part.replace(path)
        return Ok(DownloadResult(path=path, reused=False, size=path.stat().st_size))
