from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from cikit.core.config import CiConfig, load_config_or_default
from cikit.core.errors import ErrorCode
from cikit.core.result import Err
from cikit.output.console import ConsoleProtocol, RichConsole

ROOT_ENV_VAR = "CIKIT_ROOT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: CiConfig
    env: Mapping[str, str]
    console: ConsoleProtocol


def detect_root() -> Path:
    override = os.environ.get(ROOT_ENV_VAR)
    if override:
        return Path(override)
    return Path.cwd()


def build_context() -> CLIContext:
    console = RichConsole()
    root = detect_root()

    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(
        root=root,
        config=config_result.value,
        env=os.environ,
        console=console,
    )
