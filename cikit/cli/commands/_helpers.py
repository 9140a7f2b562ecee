"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from cikit.core.result import Err, Ok, Result
from cikit.output.errors import pipeline_error_exit_code, print_pipeline_error
from cikit.services.errors import PipelineError

if TYPE_CHECKING:
    from cikit.cli.context import CLIContext


def unwrap_or_exit[T](result: Result[T, PipelineError], ctx: CLIContext) -> T:
    """Return the value of an Ok, or print the error and exit non-zero."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            print_pipeline_error(error, ctx.console)
            exit_with_code(pipeline_error_exit_code(error))


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
