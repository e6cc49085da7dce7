"""Platform-aware path utilities.

Locates the user-level cache directory used as the tool cache when the
CI runner does not provide one.
"""

from __future__ import annotations

import os
import tempfile
from functools import lru_cache
from pathlib import Path

from .detection import Platform, detect_platform

__all__ = [
    "home",
    "user_cache_dir",
    "temp_dir",
    "clear_caches",
]

APP_NAME = "setup-blender"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix, then Path.home().
    """
    if detect_platform() == Platform.WINDOWS:
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """Get the user-level cache directory.

    Location: ~/.cache/setup-blender (Linux/macOS, honours XDG_CACHE_HOME)
    or %LOCALAPPDATA%/setup-blender (Windows).
    """
    if detect_platform() == Platform.WINDOWS:
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data) / APP_NAME
        return home() / "AppData" / "Local" / APP_NAME

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / APP_NAME
    return home() / ".cache" / APP_NAME


def temp_dir() -> Path:
    """System temporary directory (not cached; honours TMPDIR changes)."""
    return Path(tempfile.gettempdir())


def clear_caches() -> None:
    """Clear cached paths. Useful in tests when environment variables change."""
    home.cache_clear()
    user_cache_dir.cache_clear()
