"""Release pipeline: build, test, publish, tag, push.

Any failure stops the pipeline. Nothing is rolled back: a tag pushed
before a later failure stays pushed.
"""

from __future__ import annotations

import contextlib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from cikit.core.config import CiConfig
from cikit.core.result import Err, Ok, Result
from cikit.dry_run import DryRun, decide_dry_run
from cikit.git.repository import Repository
from cikit.manifest import load_manifest
from cikit.output.console import ConsoleProtocol, Style
from cikit.platform.env import toolchain_env
from cikit.platform.process import run_silent
from cikit.section import section
from cikit.services.errors import PipelineError, StageError
from cikit.services.publish import Publisher

__all__ = ["Pipeline", "ReleasePlan"]


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    version: str
    tag: str
    dry_run: DryRun


class Pipeline:
    """Drives one CI run in ``root``.

    Args:
        root: Repository root, holding the manifest.
        config: Commands, branch and publish settings.
        env: Environment to read CI and token variables from.
        console: Diagnostics output.
        out: Stream for section markers (stdout when None).
        err: Stream for section timings (stderr when None).
    """

    def __init__(
        self,
        *,
        root: Path,
        config: CiConfig,
        env: Mapping[str, str],
        console: ConsoleProtocol,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.root = root
        self.config = config
        self.env = env
        self.console = console
        self.out = out
        self.err = err
        self.repo = Repository(root)

    def plan(self) -> Result[ReleasePlan, PipelineError]:
        """Read the version, derive the tag and decide the dry run."""
        manifest = load_manifest(self.root, self.config.manifest)
        if isinstance(manifest, Err):
            return manifest

        version = manifest.value.version()
        if isinstance(version, Err):
            return version

        tag = f"{self.config.ci.tag_prefix}{version.value}"
        decision = decide_dry_run(config=self.config, env=self.env, tag=tag, repo=self.repo)
        if isinstance(decision, Err):
            return decision

        return Ok(ReleasePlan(version=version.value, tag=tag, dry_run=decision.value))

    def run(self) -> Result[ReleasePlan, PipelineError]:
        """Full pipeline for a single package."""
        with self._toolchain():
            plan = self.plan()
            if isinstance(plan, Err):
                return plan
            self._report(plan.value)

            with section("BUILD", out=self.out, err=self.err):
                built = self._run_stage("build", self.config.commands.build)
            if isinstance(built, Err):
                return built

            with section("TEST", out=self.out, err=self.err):
                tested = self._run_stage("test", self.config.commands.test)
            if isinstance(tested, Err):
                return tested

            with section("PUBLISH", out=self.out, err=self.err):
                published = self._publish(plan.value, dirs=None)
            if isinstance(published, Err):
                return published

            return plan

    def publish_all(self, dirs: Sequence[str]) -> Result[ReleasePlan, PipelineError]:
        """Publish several packages of a workspace, then tag and push."""
        with self._toolchain():
            plan = self.plan()
            if isinstance(plan, Err):
                return plan
            self._report(plan.value)

            with section("PUBLISH", out=self.out, err=self.err):
                published = self._publish(plan.value, dirs=dirs)
            if isinstance(published, Err):
                return published

            return plan

    def _publish(
        self, plan: ReleasePlan, *, dirs: Sequence[str] | None
    ) -> Result[None, PipelineError]:
        publisher = Publisher(
            root=self.root, config=self.config, env=self.env, dry_run=plan.dry_run
        )
        published = publisher.publish() if dirs is None else publisher.publish_all(dirs)
        if isinstance(published, Err):
            return published

        tagged = self.repo.tag(plan.tag, dry_run=plan.dry_run)
        if isinstance(tagged, Err):
            return tagged

        return self.repo.push_tags(dry_run=plan.dry_run)

    def _run_stage(self, stage: str, cmd: Sequence[str]) -> Result[None, StageError]:
        result = run_silent(list(cmd), cwd=self.root)
        if isinstance(result, Err):
            return Err(StageError.from_process(stage, " ".join(cmd), result.error))
        return Ok(None)

    def _report(self, plan: ReleasePlan) -> None:
        self.console.info(f"version {plan.version}, tag {plan.tag}")
        if plan.dry_run.enabled:
            self.console.print(f"dry run: {plan.dry_run.reason}", Style.WARNING)
        else:
            self.console.print("release run: publishing for real", Style.BOLD)

    def _toolchain(self) -> contextlib.AbstractContextManager[None]:
        toolchain = self.config.ci.toolchain
        if toolchain is None:
            return contextlib.nullcontext()
        return toolchain_env(toolchain)
