from __future__ import annotations

from dataclasses import dataclass

from cikit.core.config import ConfigError
from cikit.git.repository import GitError
from cikit.manifest import ManifestError
from cikit.platform.process import ProcessError


@dataclass(frozen=True, slots=True)
class StageError:
    """An external build/test/publish command failed.

    ``message`` is safe to print: it never contains the registry token.
    """

    stage: str
    message: str
    returncode: int
    hint: str | None = None

    @classmethod
    def from_process(cls, stage: str, label: str, error: ProcessError) -> StageError:
        return cls(
            stage=stage,
            message=f"{label} failed (exit {error.returncode})",
            returncode=error.returncode,
            hint=error.stderr.strip() or None,
        )


type PipelineError = ConfigError | ManifestError | GitError | StageError
