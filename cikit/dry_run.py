"""Dry-run decision.

A run only publishes for real when all of these hold:
- it is a CI run (the CI variable is present, whatever its value),
- the release tag does not exist yet,
- the release branch is checked out.

The decision is made once per run and handed to every mutating operation
as a ``DryRun`` value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cikit.core.config import CiConfig
from cikit.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from cikit.git.repository import GitError, Repository

__all__ = ["DRY_RUN_FLAG", "DryRun", "decide_dry_run"]

DRY_RUN_FLAG = "--dry-run"


@dataclass(frozen=True, slots=True)
class DryRun:
    """Whether mutating operations are simulated, and why.

    Attributes:
        enabled: True when publish/tag/push must not touch real systems.
        reason: First condition that forced the dry run, None when disabled.
    """

    enabled: bool
    reason: str | None = None

    def flag(self) -> str | None:
        """The simulate argument for cargo, only present in a dry run."""
        return DRY_RUN_FLAG if self.enabled else None

    def args(self) -> list[str]:
        flag = self.flag()
        return [flag] if flag is not None else []

    @classmethod
    def real(cls) -> DryRun:
        return cls(enabled=False)

    @classmethod
    def simulated(cls, reason: str) -> DryRun:
        return cls(enabled=True, reason=reason)


def decide_dry_run(
    *,
    config: CiConfig,
    env: Mapping[str, str],
    tag: str,
    repo: Repository,
) -> Result[DryRun, GitError]:
    """Decide whether this run is a dry run.

    Conditions are checked in order and the first one that holds wins, so
    git is not queried outside CI.
    """
    if config.ci.env_var not in env:
        return Ok(DryRun.simulated(f"{config.ci.env_var} is not set"))

    tags = repo.tag_list()
    if isinstance(tags, Err):
        return tags
    if tag in tags.value:
        return Ok(DryRun.simulated(f"tag {tag} already exists"))

    branch = repo.current_branch()
    if isinstance(branch, Err):
        return branch
    if branch.value != config.ci.release_branch:
        return Ok(
            DryRun.simulated(f"branch '{branch.value}' is not '{config.ci.release_branch}'")
        )

    return Ok(DryRun.real())
