"""Tests for cikit.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from cikit.core.result import Err, Ok
from cikit.platform.process import ProcessError, run, run_silent

PY = sys.executable


class TestProcessError:
    """Test ProcessError dataclass."""

    def test_str_short_command(self) -> None:
        error = ProcessError(
            command=("git", "push", "--tags"),
            returncode=128,
            stdout="",
            stderr="fatal: could not read from remote repository",
        )
        assert str(error) == "git push --tags failed (exit 128)"

    def test_str_hides_trailing_arguments(self) -> None:
        error = ProcessError(
            command=("cargo", "publish", "--token", "s3cr3t"),
            returncode=101,
            stdout="",
            stderr="",
        )
        assert str(error) == "cargo publish --token ... failed (exit 101)"
        assert "s3cr3t" not in str(error)

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    """Test run function."""

    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "print('v1.0.0')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert result.value.strip() == "v1.0.0"

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import sys; sys.exit(42)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 42

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert len(result.error.stderr) > 0

    def test_captures_stderr(self, tmp_path: Path) -> None:
        result = run(
            [PY, "-c", "import sys; sys.stderr.write('error msg'); sys.exit(1)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert "error msg" in result.error.stderr

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_text("", encoding="utf-8")

        result = run([PY, "-c", "import os; print(os.listdir('.'))"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "Cargo.toml" in result.value

    def test_uses_env(self, tmp_path: Path) -> None:
        import os

        env = dict(os.environ)
        env["CRATES_IO_TOKEN"] = "abc"

        result = run(
            [PY, "-c", "import os; print(os.environ.get('CRATES_IO_TOKEN', ''))"],
            cwd=tmp_path,
            env=env,
        )

        assert isinstance(result, Ok)
        assert "abc" in result.value

    def test_timeout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.1)

        assert isinstance(result, Err)
        assert "timed out" in result.error.stderr.lower()


class TestRunSilent:
    """Test run_silent function."""

    def test_success_returns_none(self, tmp_path: Path) -> None:
        result = run_silent([PY, "-c", "pass"], cwd=tmp_path, timeout=10.0)

        assert result == Ok(None)

    def test_failure_returns_exit_code(self, tmp_path: Path) -> None:
        result = run_silent([PY, "-c", "import sys; sys.exit(3)"], cwd=tmp_path, timeout=10.0)

        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert result.error.command[0] == PY

    def test_timeout_returns_error(self, tmp_path: Path) -> None:
        result = run_silent([PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.1)

        assert isinstance(result, Err)
        assert "timed out" in result.error.stderr.lower()

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run_silent(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
