"""Timed, foldable log sections.

GitHub Actions (and other CI UIs that understand the same workflow
commands) fold everything printed between ``::group::NAME`` and
``::endgroup::``. The elapsed time goes to stderr as ``NAME: 1.23s``.

Usage:
    with section("BUILD"):
        run_silent(["cargo", "build"], cwd=root)
"""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TextIO

__all__ = ["Section", "format_elapsed", "section"]

Clock = Callable[[], float]


def format_elapsed(seconds: float) -> str:
    """Render a duration with two decimals in the largest fitting unit."""
    if seconds >= 1:
        return f"{seconds:.2f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.2f}ms"
    if seconds >= 1e-6:
        return f"{seconds * 1e6:.2f}µs"
    return f"{seconds * 1e9:.2f}ns"


class Section:
    """One named phase of a pipeline run.

    ``begin`` and ``end`` are explicit; use :func:`section` to get them
    paired on every exit path.
    """

    def __init__(
        self,
        name: str,
        *,
        out: TextIO | None = None,
        err: TextIO | None = None,
        clock: Clock = time.perf_counter,
    ) -> None:
        self.name = name
        self._out = out
        self._err = err
        self._clock = clock
        self._start: float | None = None
        self.elapsed: float | None = None

    @property
    def out(self) -> TextIO:
        # Resolved late so pytest's capsys replacement of sys.stdout is seen.
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def begin(self) -> None:
        print(f"::group::{self.name}", file=self.out, flush=True)
        self._start = self._clock()

    def end(self) -> float:
        """Report elapsed time and close the group. Safe to call twice."""
        if self.elapsed is not None:
            return self.elapsed
        start = self._start if self._start is not None else self._clock()
        self.elapsed = self._clock() - start
        print(f"{self.name}: {format_elapsed(self.elapsed)}", file=self.err, flush=True)
        print("::endgroup::", file=self.out, flush=True)
        return self.elapsed


@contextmanager
def section(
    name: str,
    *,
    out: TextIO | None = None,
    err: TextIO | None = None,
    clock: Clock = time.perf_counter,
) -> Iterator[Section]:
    s = Section(name, out=out, err=err, clock=clock)
    s.begin()
    try:
        yield s
    finally:
        s.end()
