"""Platform abstraction layer."""

from .detection import (
    Platform,
    PlatformTarget,
    UnsupportedPlatform,
    detect_arch,
    detect_platform,
    detect_target,
)
from .paths import home, temp_dir, user_cache_dir
from .process import ProcessError, run, which

__all__ = [
    # detection
    "Platform",
    "PlatformTarget",
    "UnsupportedPlatform",
    "detect_arch",
    "detect_platform",
    "detect_target",
    # paths
    "home",
    "temp_dir",
    "user_cache_dir",
    # process
    "ProcessError",
    "run",
    "which",
]
