"""Platform and architecture detection.

Maps the running host onto the identifiers used in Blender release
filenames: ``linux``, ``macos`` or ``windows`` for the OS and ``x64`` /
``arm64`` (or the raw machine name) for the architecture.
"""

from __future__ import annotations

import os as _os
import platform as _platform
import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache

from sb.core.result import Err, Ok, Result

__all__ = [
    "Platform",
    "PlatformTarget",
    "UnsupportedPlatform",
    "detect_arch",
    "detect_platform",
    "detect_target",
    "normalize_arch",
    "normalize_platform",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_supported(self) -> bool:
        return self != Platform.UNKNOWN


@dataclass(frozen=True, slots=True)
class UnsupportedPlatform:
    """The host OS has no Blender release flavour.

    Attributes:
        system: The raw platform identifier (e.g. ``sys.platform``).
    """

    system: str

    def __str__(self) -> str:
        return f"Unsupported os: {self.system}"


@dataclass(frozen=True, slots=True)
class PlatformTarget:
    """OS/arch pair as it appears in release filenames.

    ``arch`` is opaque: it is matched verbatim against filenames.
    """

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


def normalize_platform(system: str) -> Platform:
    """Map a ``sys.platform``-style identifier to a Platform."""
    s = system.lower()
    if s.startswith("linux"):
        return Platform.LINUX
    if s.startswith(("darwin", "mac")):
        return Platform.MACOS
    if s.startswith(("win32", "cygwin", "msys", "windows")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


def normalize_arch(machine: str) -> str:
    """Map a machine name to the release filename architecture.

    Unknown machines pass through lowercased.
    """
    m = machine.strip().lower()
    if m in ("x86_64", "amd64", "x64"):
        return "x64"
    if m in ("aarch64", "arm64"):
        return "arm64"
    if m in ("i386", "i686", "x86", "ia32"):
        return "ia32"
    return m


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    return normalize_platform(_sys.platform)


@lru_cache(maxsize=1)
def detect_arch() -> str:
    """Detect the current CPU architecture (cached)."""
    # NOTE: avoid platform.machine() on Windows, it may query WMI and hang.
    if detect_platform() == Platform.WINDOWS:
        machine = (
            _os.environ.get("PROCESSOR_ARCHITEW6432")
            or _os.environ.get("PROCESSOR_ARCHITECTURE")
            or ""
        )
    else:
        machine = _platform.machine()
    return normalize_arch(machine)


def detect_target(
    os_name: str | None = None,
    arch: str | None = None,
) -> Result[PlatformTarget, UnsupportedPlatform]:
    """Build the release target, detecting whatever is not given.

    Args:
        os_name: Override for the OS (``linux``, ``macos``, ``windows``,
            or any ``sys.platform`` value)
        arch: Override for the architecture (normalized like detection)

    Returns:
        Ok with PlatformTarget, or Err if the OS cannot be mapped
    """
    system = os_name if os_name is not None else _sys.platform
    platform = normalize_platform(system) if os_name is not None else detect_platform()
    if not platform.is_supported:
        return Err(UnsupportedPlatform(system=system))

    resolved_arch = normalize_arch(arch) if arch is not None else detect_arch()
    return Ok(PlatformTarget(os=str(platform), arch=resolved_arch))
