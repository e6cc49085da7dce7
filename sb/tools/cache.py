"""Local tool cache keyed by (tool, version, arch).

Layout matches the CI runner tool cache, so a directory cached on a
hosted runner is found by other tools reading the same cache:

    {root}/{tool}/{version}/{arch}/          <- cached tree
    {root}/{tool}/{version}/{arch}.complete  <- marker, JSON metadata

An entry without its marker is an interrupted copy and is ignored.
"""

from __future__ import annotations

import shutil
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path

from sb.core.result import Err, Ok, Result
from sb.platform.files import remove_tree, write_json_atomic

__all__ = ["CacheEntry", "CacheError", "ToolCache"]


@dataclass(frozen=True, slots=True)
class CacheError:
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Marker contents for a cached directory."""

    tool: str
    version: str
    arch: str
    cached_at: str

    @classmethod
    def now(cls, tool: str, version: str, arch: str) -> CacheEntry:
        return cls(tool=tool, version=version, arch=arch, cached_at=datetime.now().isoformat())


class ToolCache:
    """Directory cache rooted at ``root``.

    Usage:
        cache = ToolCache(root)
        path = cache.find("blender", "4.0.2", "x64")
        if path is None:
            path = cache.cache_dir(extracted, "blender", "4.0.2", "x64").unwrap()
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    def entry_dir(self, tool: str, version: str, arch: str) -> Path:
        return self._root / tool / version / arch

    def _marker(self, tool: str, version: str, arch: str) -> Path:
        return self._root / tool / version / f"{arch}.complete"

    def find(self, tool: str, version: str, arch: str) -> Path | None:
        """Cached directory for the key, or None if absent or incomplete."""
        path = self.entry_dir(tool, version, arch)
        if path.is_dir() and self._marker(tool, version, arch).is_file():
            return path
        return None

    def cache_dir(
        self, source: Path, tool: str, version: str, arch: str
    ) -> Result[Path, CacheError]:
        """Move source into the cache and mark it complete.

        Any previous entry for the key is replaced. The marker is written
        last, so a crash mid-move leaves an entry find() ignores.

        Returns:
            Ok with the cached directory, or Err with CacheError
        """
        if not source.is_dir():
            return Err(CacheError(path=source, message="Source directory not found"))

        target = self.entry_dir(tool, version, arch)
        marker = self._marker(tool, version, arch)
        try:
            marker.unlink(missing_ok=True)
            remove_tree(target)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(target))
            write_json_atomic(marker, asdict(CacheEntry.now(tool, version, arch)))
        except OSError as e:
            return Err(CacheError(path=target, message=f"Failed to cache directory ({e})"))

        return Ok(target)
