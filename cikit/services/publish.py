"""Package publishing.

``publish`` releases the crate in the working directory. ``publish_all``
releases several crates of one workspace in order; a crate that depends on
one published a moment earlier may not see it in the registry index yet,
so each crate is first retried with ``--dry-run`` until the registry
accepts it, then published for real.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from time import sleep

from cikit.core.config import CiConfig
from cikit.core.result import Err, Ok, Result
from cikit.dry_run import DRY_RUN_FLAG, DryRun
from cikit.platform.process import run_silent
from cikit.services.errors import StageError

__all__ = ["Publisher"]

_STAGE = "publish"


class Publisher:
    def __init__(
        self,
        *,
        root: Path,
        config: CiConfig,
        env: Mapping[str, str],
        dry_run: DryRun,
    ) -> None:
        self.root = root
        self.config = config
        self.env = env
        self.dry_run = dry_run

    def token(self) -> str:
        publish = self.config.publish
        return self.env.get(publish.token_env_var, publish.token_placeholder)

    def publish(self) -> Result[None, StageError]:
        """Publish the package in ``root``, simulated in a dry run."""
        cmd = [*self.config.commands.publish, "--token", self.token(), *self.dry_run.args()]
        result = run_silent(cmd, cwd=self.root)
        if isinstance(result, Err):
            label = " ".join(self.config.commands.publish)
            return Err(StageError.from_process(_STAGE, label, result.error))
        return Ok(None)

    def publish_all(self, dirs: Sequence[str]) -> Result[None, StageError]:
        """Publish each package directory in order.

        Does nothing in a dry run. Simulated attempts that keep failing
        are not an error by themselves; the real publish that follows is.
        """
        if self.dry_run.enabled:
            return Ok(None)

        for directory in dirs:
            self._wait_until_publishable(directory)
            result = run_silent(self._publish_cmd(directory), cwd=self.root)
            if isinstance(result, Err):
                label = f"{' '.join(self.config.commands.publish)} ({directory})"
                return Err(StageError.from_process(_STAGE, label, result.error))
        return Ok(None)

    def _wait_until_publishable(self, directory: str) -> None:
        """Retry a simulated publish until it passes or attempts run out."""
        publish = self.config.publish
        for _ in range(publish.retry_attempts):
            sleep(publish.retry_delay_seconds)
            simulated = run_silent([*self._publish_cmd(directory), DRY_RUN_FLAG], cwd=self.root)
            if isinstance(simulated, Ok):
                return

    def _publish_cmd(self, directory: str) -> list[str]:
        manifest = f"{directory}/{self.config.manifest}"
        return [
            *self.config.commands.publish,
            "--manifest-path",
            manifest,
            "--token",
            self.token(),
        ]
