"""Run command - build, test and publish the package in the current repo."""

from __future__ import annotations

from cikit.cli.commands._helpers import unwrap_or_exit
from cikit.cli.context import build_context
from cikit.services.pipeline import Pipeline


def run() -> None:
    """Build, test, publish, then tag and push the release."""
    ctx = build_context()
    pipeline = Pipeline(root=ctx.root, config=ctx.config, env=ctx.env, console=ctx.console)

    plan = unwrap_or_exit(pipeline.run(), ctx)
    if plan.dry_run.enabled:
        ctx.console.success(f"{plan.tag}: dry run complete")
    else:
        ctx.console.success(f"{plan.tag}: published")
