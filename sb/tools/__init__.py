"""Download, extraction and local caching of release artifacts."""

from .cache import CacheEntry, CacheError, ToolCache
from .download import DownloadProgress, DownloadResult, Downloader
from .installer import InstallError, Installer, InstallResult

__all__ = [
    "CacheEntry",
    "CacheError",
    "DownloadProgress",
    "DownloadResult",
    "Downloader",
    "InstallError",
    "InstallResult",
    "Installer",
    "ToolCache",
]
