"""Tests for platform/process.py."""

import sys
from pathlib import Path

from sb.core.result import Err, Ok
from sb.platform.process import ProcessError, run, which


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert result.value.strip() == "hello"

    def test_nonzero_exit(self, tmp_path: Path) -> None:
        code = "import sys; sys.stderr.write('bad'); sys.exit(3)"
        result = run([sys.executable, "-c", code], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert result.error.stderr == "bad"

    def test_missing_executable(self, tmp_path: Path) -> None:
        result = run(["definitely-not-a-real-binary-sb"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert str(result.error).startswith("definitely-not-a-real-binary-sb could not be run")


class TestProcessError:
    def test_str(self) -> None:
        error = ProcessError(command=("/usr/bin/7z", "x", "-y", "a.dmg"), returncode=2)
        assert str(error) == "7z exited with status 2"

    def test_detail_prefers_stderr(self) -> None:
        error = ProcessError(("7z",), 2, stdout="Everything is Ok", stderr="ERROR: Data Error")
        assert error.detail() == "ERROR: Data Error"

    def test_detail_falls_back_to_stdout(self) -> None:
        stdout = "\n".join(f"line {i}" for i in range(10))
        error = ProcessError(("7z",), 2, stdout=stdout)
        assert error.detail(max_lines=2) == "line 8\nline 9"


class TestWhich:
    def test_missing(self) -> None:
        assert which("definitely-not-a-real-binary-sb") is None
