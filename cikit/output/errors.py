"""Error presentation utilities.

Centralized error formatting and exit code mapping for the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cikit.core.config import ConfigError
from cikit.core.errors import ErrorCode
from cikit.git.repository import GitError
from cikit.manifest import ManifestError
from cikit.output.console import Style
from cikit.services.errors import PipelineError, StageError

if TYPE_CHECKING:
    from cikit.output.console import ConsoleProtocol

__all__ = ["pipeline_error_exit_code", "print_pipeline_error"]


def print_pipeline_error(error: PipelineError, console: ConsoleProtocol) -> None:
    """Print a pipeline error with the detail relevant to its kind."""
    match error:
        case ConfigError(message=message):
            console.error(message)
        case ManifestError(message=message):
            console.error(message)
        case GitError(command=command, message=message):
            console.error(f"git {command}: {message}")
        case StageError(stage=stage, message=message, hint=hint):
            console.error(f"{stage}: {message}")
            if hint:
                console.print(hint, Style.DIM)


def pipeline_error_exit_code(error: PipelineError) -> int:
    """Exit code for a pipeline error.

    CI only needs pass/fail, so every kind maps to the same code.
    """
    del error
    return int(ErrorCode.FAILURE)
