"""Git adapter for release tagging.

Reads (current branch, tag list) always run. Writes (tag, push) take the
run's DryRun value and become no-ops when it is enabled.

Usage:
    repo = Repository(Path.cwd())
    match repo.has_tag("v1.2.3"):
        case Ok(True):
            print("already released")
        case Ok(False):
            repo.tag("v1.2.3", dry_run=plan.dry_run)
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cikit.core.result import Err, Ok, Result
from cikit.dry_run import DryRun
from cikit.platform.process import ProcessError
from cikit.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "push --tags")
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working copy.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def current_branch(self) -> Result[str, GitError]:
        """Name of the checked-out branch ("" on a detached HEAD)."""
        args = ["branch", "--show-current"]
        return self._run(args).map(str.strip).map_err(lambda e: _git_error(args, e))

    def tag_list(self) -> Result[list[str], GitError]:
        """Existing tags, one per line of ``git tag --list``."""
        args = ["tag", "--list"]
        match self._run(args):
            case Err(e):
                return Err(_git_error(args, e))
            case Ok(stdout):
                return Ok([line.strip() for line in stdout.splitlines() if line.strip()])

    def has_tag(self, name: str) -> Result[bool, GitError]:
        return self.tag_list().map(lambda tags: name in tags)

    def tag(self, name: str, *, dry_run: DryRun) -> Result[None, GitError]:
        """Create a lightweight tag at HEAD."""
        if dry_run.enabled:
            return Ok(None)
        args = ["tag", name]
        return self._run(args).map(lambda _: None).map_err(lambda e: _git_error(args, e))

    def push_tags(self, *, dry_run: DryRun) -> Result[None, GitError]:
        """Push all local tags to the default remote."""
        # `git push --tags --dry-run` exists, but it fails with a permission
        # error on forks, so a dry run skips the push entirely.
        if dry_run.enabled:
            return Ok(None)
        args = ["push", "--tags"]
        return self._run(args).map(lambda _: None).map_err(lambda e: _git_error(args, e))

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if args[0] == "push" else _GIT_TIMEOUT_SECONDS
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _git_error(args: list[str], error: ProcessError) -> GitError:
    command = " ".join(args)
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or f"git {command} failed",
        returncode=error.returncode,
    )
