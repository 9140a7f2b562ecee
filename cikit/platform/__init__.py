"""Platform layer: external processes and environment."""

from .env import RUSTUP_TOOLCHAIN, pushenv, toolchain_env
from .process import ProcessError, run, run_silent

__all__ = [
    # env
    "RUSTUP_TOOLCHAIN",
    "pushenv",
    "toolchain_env",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
