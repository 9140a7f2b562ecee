"""Package manifest reader.

This is deliberately not a TOML parser. Only single-line assignments of
the form ``name = "value"`` are recognised, which is all a release needs
from ``Cargo.toml``. The first matching line wins, so a ``version`` key
under ``[package]`` must come before any other table that also has one.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from cikit.core.config import DEFAULT_MANIFEST
from cikit.core.result import Err, Ok, Result

__all__ = ["Manifest", "ManifestError", "load_manifest"]


@dataclass(frozen=True, slots=True)
class ManifestError:
    """Error reading or querying a manifest.

    Attributes:
        kind: "io" (missing/unreadable file), "not_found" (no such field)
            or "malformed_value" (value is not a non-empty quoted string).
        message: Human readable description naming the field and path.
        path: The manifest file.
    """

    kind: Literal["io", "not_found", "malformed_value"]
    message: str
    path: Path


@dataclass(frozen=True, slots=True)
class Manifest:
    """In-memory copy of a manifest file, read once."""

    path: Path
    contents: str

    def version(self) -> Result[str, ManifestError]:
        return self.get("version")

    def get(self, field: str) -> Result[str, ManifestError]:
        """Return the unquoted value of the first ``field = "..."`` line."""
        for line in self.contents.splitlines():
            words = line.split()
            if len(words) < 3 or words[0] != field or words[1] != "=":
                continue
            return _unquote(words[2], field=field, path=self.path)

        return Err(
            ManifestError(
                kind="not_found",
                message=f"can't find `{field}` in {self.path}",
                path=self.path,
            )
        )


def _unquote(token: str, *, field: str, path: Path) -> Result[str, ManifestError]:
    if len(token) <= 2 or not (token.startswith('"') and token.endswith('"')):
        return Err(
            ManifestError(
                kind="malformed_value",
                message=f"`{field}` in {path} is not a non-empty quoted string: {token}",
                path=path,
            )
        )
    return Ok(token[1:-1])


def load_manifest(root: Path, name: str = DEFAULT_MANIFEST) -> Result[Manifest, ManifestError]:
    """Read ``root / name``.

    Args:
        root: Directory holding the manifest (usually the working directory).
        name: Manifest file name.

    Returns:
        Ok(Manifest) on success, Err(ManifestError) with kind "io" otherwise.
    """
    path = root / name
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ManifestError(kind="io", message=f"manifest not found: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(kind="io", message=f"cannot read {path}: {e}", path=path))
    return Ok(Manifest(path=path, contents=contents))
