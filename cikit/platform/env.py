"""Scoped environment overrides.

Child processes inherit ``os.environ``, so a temporary override here is
seen by every cargo invocation made inside the block.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, MutableMapping
from contextlib import AbstractContextManager, contextmanager

__all__ = ["RUSTUP_TOOLCHAIN", "pushenv", "toolchain_env"]

RUSTUP_TOOLCHAIN = "RUSTUP_TOOLCHAIN"


@contextmanager
def pushenv(
    key: str,
    value: str,
    environ: MutableMapping[str, str] | None = None,
) -> Iterator[None]:
    """Set ``key`` for the duration of the block, then restore it.

    A variable that did not exist before is removed again on exit.
    """
    target = os.environ if environ is None else environ
    previous = target.get(key)
    target[key] = value
    try:
        yield
    finally:
        if previous is None:
            target.pop(key, None)
        else:
            target[key] = previous


def toolchain_env(
    name: str,
    environ: MutableMapping[str, str] | None = None,
) -> AbstractContextManager[None]:
    """Pin the rustup toolchain used by cargo inside the block."""
    return pushenv(RUSTUP_TOOLCHAIN, name, environ)
