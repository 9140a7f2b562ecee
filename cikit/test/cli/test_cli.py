from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cikit import __version__
from cikit.cli.app import app
from cikit.core.result import Err, Ok, Result
from cikit.git import repository as repo_mod
from cikit.platform.process import ProcessError
from cikit.services import pipeline as pipeline_mod
from cikit.services import publish as publish_mod

runner = CliRunner()


class Recorder:
    def __init__(self) -> None:
        self.commands: list[list[str]] = []
        self.fail_build = False

    def run_silent(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[None, ProcessError]:
        del cwd, env, timeout
        self.commands.append(list(cmd))
        if self.fail_build and list(cmd[:2]) == ["cargo", "test"]:
            return Err(ProcessError(tuple(cmd), 101, "", ""))
        return Ok(None)

    def run_git(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cwd, env, timeout
        self.commands.append(list(cmd))
        return Ok("master\n" if "branch" in cmd else "")


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Recorder:
    rec = Recorder()
    monkeypatch.setattr(pipeline_mod, "run_silent", rec.run_silent)
    monkeypatch.setattr(publish_mod, "run_silent", rec.run_silent)
    monkeypatch.setattr(publish_mod, "sleep", lambda seconds: None)
    monkeypatch.setattr(repo_mod, "run_process", rec.run_git)
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("CRATES_IO_TOKEN", raising=False)
    monkeypatch.setenv("CIKIT_ROOT", str(tmp_path))
    (tmp_path / "Cargo.toml").write_text(
        '[package]\nname = "demo"\nversion = "1.2.3"\n', encoding="utf-8"
    )
    return rec


def test_version_option() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_outside_ci_is_dry_run(recorder: Recorder) -> None:
    result = runner.invoke(app, ["run"])

    assert result.exit_code == 0, result.output
    assert recorder.commands[-1] == ["cargo", "publish", "--token", "no token", "--dry-run"]
    assert not any(c[0] == "git" for c in recorder.commands)
    assert "::group::BUILD" in result.output
    assert "::endgroup::" in result.output
    assert "v1.2.3: dry run complete" in result.output


def test_run_failure_exits_one(recorder: Recorder) -> None:
    recorder.fail_build = True

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert "build: cargo test --workspace --no-run failed (exit 101)" in result.output


def test_plan(recorder: Recorder, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CI", "true")

    result = runner.invoke(app, ["plan"])

    assert result.exit_code == 0, result.output
    assert "version: 1.2.3" in result.output
    assert "tag: v1.2.3" in result.output
    assert "dry_run: false" in result.output


def test_missing_manifest_exits_one(recorder: Recorder, tmp_path: Path) -> None:
    (tmp_path / "Cargo.toml").unlink()

    result = runner.invoke(app, ["plan"])

    assert result.exit_code == 1
    assert "manifest not found" in result.output


def test_root_option(recorder: Recorder, tmp_path: Path) -> None:
    other = tmp_path / "other"
    other.mkdir()
    (other / "Cargo.toml").write_text('version = "4.5.6"\n', encoding="utf-8")

    result = runner.invoke(app, ["--root", str(other), "plan"])

    assert result.exit_code == 0, result.output
    assert "tag: v4.5.6" in result.output


def test_publish_all_dry_run(recorder: Recorder) -> None:
    result = runner.invoke(app, ["publish-all", "core", "cli"])

    assert result.exit_code == 0, result.output
    assert not any(c[:2] == ["cargo", "publish"] for c in recorder.commands)


def test_broken_config_exits_one(recorder: Recorder, tmp_path: Path) -> None:
    (tmp_path / "cikit.toml").write_text("[ci\n", encoding="utf-8")

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert "Invalid TOML" in result.output
