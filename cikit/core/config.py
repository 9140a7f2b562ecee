"""Typed configuration loading and access.

The defaults describe a single cargo crate released from ``master``. A
``cikit.toml`` at the repository root can override any of them:

    manifest = "Cargo.toml"

    [ci]
    env_var = "CI"
    release_branch = "master"
    tag_prefix = "v"
    toolchain = "stable"

    [commands]
    build = ["cargo", "test", "--workspace", "--no-run"]
    test = ["cargo", "test", "--workspace", "--no-run"]
    publish = ["cargo", "publish"]

    [publish]
    token_env_var = "CRATES_IO_TOKEN"
    token_placeholder = "no token"
    retry_attempts = 20
    retry_delay_seconds = 10.0
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_float,
    get_int,
    get_str,
    get_str_tuple,
    get_table,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "CiConfig",
    "CiEnvConfig",
    "CommandsConfig",
    "ConfigError",
    "PublishConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "cikit.toml"

DEFAULT_MANIFEST = "Cargo.toml"
DEFAULT_CI_ENV_VAR = "CI"
DEFAULT_RELEASE_BRANCH = "master"
DEFAULT_TAG_PREFIX = "v"

# Build and test are the same compile-only invocation unless overridden.
DEFAULT_BUILD_COMMAND = ("cargo", "test", "--workspace", "--no-run")
DEFAULT_TEST_COMMAND = ("cargo", "test", "--workspace", "--no-run")
DEFAULT_PUBLISH_COMMAND = ("cargo", "publish")

DEFAULT_TOKEN_ENV_VAR = "CRATES_IO_TOKEN"
DEFAULT_TOKEN_PLACEHOLDER = "no token"
DEFAULT_PUBLISH_RETRY_ATTEMPTS = 20
DEFAULT_PUBLISH_RETRY_DELAY_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class CiEnvConfig:
    """How the CI context and the release branch are recognised.

    Attributes:
        env_var: Variable whose presence marks a CI run (value is ignored).
        release_branch: Only this branch may publish for real.
        tag_prefix: Prepended to the manifest version to form the tag.
        toolchain: Optional RUSTUP_TOOLCHAIN override for the whole run.
    """

    env_var: str = DEFAULT_CI_ENV_VAR
    release_branch: str = DEFAULT_RELEASE_BRANCH
    tag_prefix: str = DEFAULT_TAG_PREFIX
    toolchain: str | None = None


@dataclass(frozen=True, slots=True)
class CommandsConfig:
    """Command lines for the build, test and publish phases."""

    build: tuple[str, ...] = DEFAULT_BUILD_COMMAND
    test: tuple[str, ...] = DEFAULT_TEST_COMMAND
    publish: tuple[str, ...] = DEFAULT_PUBLISH_COMMAND


@dataclass(frozen=True, slots=True)
class PublishConfig:
    """Registry authentication and the multi-package retry loop."""

    token_env_var: str = DEFAULT_TOKEN_ENV_VAR
    token_placeholder: str = DEFAULT_TOKEN_PLACEHOLDER
    retry_attempts: int = DEFAULT_PUBLISH_RETRY_ATTEMPTS
    retry_delay_seconds: float = DEFAULT_PUBLISH_RETRY_DELAY_SECONDS


@dataclass(frozen=True, slots=True)
class CiConfig:
    """Main configuration container."""

    manifest: str = DEFAULT_MANIFEST
    ci: CiEnvConfig = field(default_factory=CiEnvConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> CiConfig:
        """Create CiConfig from a mapping (parsed TOML)."""
        ci: StrDict = get_table(data, "ci") or {}
        commands: StrDict = get_table(data, "commands") or {}
        publish: StrDict = get_table(data, "publish") or {}

        retry_attempts = get_int(publish, "retry_attempts")
        if retry_attempts is not None and retry_attempts < 1:
            raise ValueError(f"publish.retry_attempts must be >= 1, got {retry_attempts}")
        retry_delay = get_float(publish, "retry_delay_seconds")
        if retry_delay is not None and retry_delay < 0:
            raise ValueError(f"publish.retry_delay_seconds must be >= 0, got {retry_delay}")

        return cls(
            manifest=get_str(data, "manifest") or DEFAULT_MANIFEST,
            ci=CiEnvConfig(
                env_var=get_str(ci, "env_var") or DEFAULT_CI_ENV_VAR,
                release_branch=get_str(ci, "release_branch") or DEFAULT_RELEASE_BRANCH,
                tag_prefix=get_str(ci, "tag_prefix") or DEFAULT_TAG_PREFIX,
                toolchain=get_str(ci, "toolchain"),
            ),
            commands=CommandsConfig(
                build=get_str_tuple(commands, "build") or DEFAULT_BUILD_COMMAND,
                test=get_str_tuple(commands, "test") or DEFAULT_TEST_COMMAND,
                publish=get_str_tuple(commands, "publish") or DEFAULT_PUBLISH_COMMAND,
            ),
            publish=PublishConfig(
                token_env_var=get_str(publish, "token_env_var") or DEFAULT_TOKEN_ENV_VAR,
                token_placeholder=get_str(publish, "token_placeholder")
                or DEFAULT_TOKEN_PLACEHOLDER,
                retry_attempts=retry_attempts or DEFAULT_PUBLISH_RETRY_ATTEMPTS,
                retry_delay_seconds=DEFAULT_PUBLISH_RETRY_DELAY_SECONDS
                if retry_delay is None
                else retry_delay,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[CiConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to cikit.toml

    Returns:
        Ok(CiConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(CiConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(root: Path) -> Result[CiConfig, ConfigError]:
    """Load ``cikit.toml`` from root, or the defaults when there is none.

    A config file that exists but cannot be parsed is still an error.
    """
    path = root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(CiConfig())
    return load_config(path)
