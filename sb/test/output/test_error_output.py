"""Tests for output/errors.py - error messages and exit codes."""

from pathlib import Path

import pytest

from sb.core.config import ConfigError
from sb.core.errors import ErrorCode
from sb.manifest.http import HttpError
from sb.output.console import MockConsole
from sb.output.errors import print_setup_error, setup_error_exit_code
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
from sb.tools.cache import CacheError
from sb.tools.installer import InstallError

HTTP_ERROR = HttpError(url="https://m.test/Blender4.0", status=503, message="Service Unavailable")


class TestExitCodes:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (BadVersionString(specifier="badver"), ErrorCode.USER_ERROR),
            (MissingInput(name="blender-version"), ErrorCode.USER_ERROR),
            (UnsupportedPlatform(system="sunos5"), ErrorCode.ENV_ERROR),
            (ConfigError("Invalid TOML syntax"), ErrorCode.ENV_ERROR),
            (UnsupportedArchive(release="blender-4.0.2-windows-x64.msi"), ErrorCode.ENV_ERROR),
            (ReleaseNotFound(version="4.0", os="linux", arch="x64"), ErrorCode.NOT_FOUND),
            (FetchFailed(error=HTTP_ERROR), ErrorCode.NETWORK_ERROR),
            (DownloadFailed(error=HTTP_ERROR), ErrorCode.NETWORK_ERROR),
            (ExtractFailed(error=InstallError(Path("a.zip"), "Invalid zip file")), ErrorCode.IO_ERROR),
            (CacheFailed(error=CacheError(Path("/c"), "Failed")), ErrorCode.IO_ERROR),
            (OutputFailed(path=Path("/out"), message="denied"), ErrorCode.IO_ERROR),
        ],
    )
    def test_mapping(self, error: SetupError, code: ErrorCode) -> None:
        assert setup_error_exit_code(error) == int(code)


class TestMessages:
    def test_resolution_messages(self) -> None:
        assert str(BadVersionString(specifier="badver")) == "Bad version string: badver"
        assert (
            str(ReleaseNotFound(version="3.3.99", os="linux", arch="x64"))
            == "Unable to find release for 3.3.99-linux-x64"
        )
        assert str(FetchFailed(error=HTTP_ERROR)) == str(HTTP_ERROR)

    def test_setup_messages(self) -> None:
        assert str(MissingInput(name="blender-version")) == (
            "Input required and not supplied: blender-version"
        )
        assert str(UnsupportedArchive(release="x.msi")) == "Unknown extension on download: x.msi"
        assert str(DownloadFailed(error=HTTP_ERROR)).startswith("Download failed: HTTP 503")


class TestPrintSetupError:
    def test_prints_message_hint_and_debug(self) -> None:
        console = MockConsole()

        print_setup_error(BadVersionString(specifier="badver"), console)

        assert console.messages[0] == "error: Bad version string: badver"
        assert console.find("hint:")
        assert console.messages[-1].startswith("debug: BadVersionString(")

    def test_not_found_hint_names_target(self) -> None:
        console = MockConsole()
        print_setup_error(ReleaseNotFound(version="4.0", os="macos", arch="ia32"), console)
        assert console.find("macos-ia32")

    def test_missing_7z_hint(self) -> None:
        console = MockConsole()
        error = ExtractFailed(
            error=InstallError(Path("b.dmg"), "7z not found on PATH (needed for .dmg)")
        )

        print_setup_error(error, console)

        assert console.find("7-Zip")

    def test_no_hint_for_network_errors(self) -> None:
        console = MockConsole()
        print_setup_error(FetchFailed(error=HTTP_ERROR), console)
        assert not console.find("hint:")
