"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sb.core.config import ConfigError
from sb.core.errors import ErrorCode
from sb.output.console import Style
from sb.platform.detection import UnsupportedPlatform
from sb.releases.errors import BadVersionString, FetchFailed, ReleaseNotFound
from sb.services.setup_errors import (
    CacheFailed,
    DownloadFailed,
    ExtractFailed,
    MissingInput,
    OutputFailed,
    SetupError,
    UnsupportedArchive,
)

if TYPE_CHECKING:
    from sb.output.console import ConsoleProtocol

__all__ = ["print_setup_error", "setup_error_exit_code"]


def print_setup_error(error: SetupError, console: ConsoleProtocol) -> None:
    """Print the failure message, plus a hint where one helps."""
    console.error(str(error))
    match error:
        case BadVersionString():
            console.print('hint: use "latest", "X.Y" or "X.Y.Z"', Style.DIM)
        case ReleaseNotFound(os=os_name, arch=arch):
            console.print(f"hint: check the mirror lists a {os_name}-{arch} build", Style.DIM)
        case UnsupportedPlatform():
            console.print("hint: pass --os linux|macos|windows", Style.DIM)
        case MissingInput(name=name):
            console.print(f"hint: pass --version or set the '{name}' input", Style.DIM)
        case ExtractFailed(error=install_error) if "7z" in install_error.message:
            console.print("hint: install p7zip / 7-Zip to extract .dmg images", Style.DIM)
        case _:
            pass
    console.debug(repr(error))


def setup_error_exit_code(error: SetupError) -> int:
    """Get exit code for a setup error."""
    match error:
        case BadVersionString() | MissingInput():
            return int(ErrorCode.USER_ERROR)
        case UnsupportedPlatform() | ConfigError() | UnsupportedArchive():
            return int(ErrorCode.ENV_ERROR)
        case ReleaseNotFound():
            return int(ErrorCode.NOT_FOUND)
        case FetchFailed() | DownloadFailed():
            return int(ErrorCode.NETWORK_ERROR)
        case ExtractFailed() | CacheFailed() | OutputFailed():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.ENV_ERROR)
