"""Publish-all command - release every package of a multi-package repo."""

from __future__ import annotations

import typer

from cikit.cli.commands._helpers import unwrap_or_exit
from cikit.cli.context import build_context
from cikit.services.pipeline import Pipeline


def publish_all(
    dirs: list[str] = typer.Argument(..., help="Package directories, in publish order"),
) -> None:
    """Publish each package directory in order, then tag and push."""
    ctx = build_context()
    pipeline = Pipeline(root=ctx.root, config=ctx.config, env=ctx.env, console=ctx.console)

    plan = unwrap_or_exit(pipeline.publish_all(dirs), ctx)
    if plan.dry_run.enabled:
        ctx.console.success(f"{plan.tag}: dry run, nothing published")
    else:
        ctx.console.success(f"{plan.tag}: published {len(dirs)} package(s)")
