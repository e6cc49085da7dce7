"""Typed configuration loading and access.

Configuration comes from three layers, later layers winning:

1. Built-in defaults (the dataclass field defaults below).
2. An optional ``setup-blender.toml`` file.
3. Environment variables (CI runner variables and ``SETUP_BLENDER_*``).

CLI flags are applied on top by the command layer.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from sb import __version__

from .result import Err, Ok, Result

__all__ = [
    "Config",
    "CacheConfig",
    "ConfigError",
    "HttpConfig",
    "MirrorConfig",
    "load_config",
    "load_config_or_default",
    "CONFIG_FILENAME",
    "DEFAULT_MANIFEST_URL",
]

CONFIG_FILENAME = "setup-blender.toml"

DEFAULT_MANIFEST_URL = "https://mirror.clarkson.edu/blender/release/"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"setup-blender/{__version__}"

ENV_MANIFEST_URL = "SETUP_BLENDER_MANIFEST_URL"
ENV_DOWNLOAD_URL = "SETUP_BLENDER_DOWNLOAD_URL"
ENV_TIMEOUT = "SETUP_BLENDER_TIMEOUT"
ENV_TOOL_CACHE = "RUNNER_TOOL_CACHE"
ENV_TEMP = "RUNNER_TEMP"

type StrDict = dict[str, object]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class MirrorConfig:
    """Where release listings and artifacts live."""

    manifest_url: str = DEFAULT_MANIFEST_URL
    download_url: str = DEFAULT_MANIFEST_URL


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Tool cache and scratch locations.

    ``None`` means "use the platform default" (see sb.platform.paths).
    """

    dir: Path | None = None
    temp_dir: Path | None = None


@dataclass(frozen=True, slots=True)
class HttpConfig:
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    mirror: MirrorConfig = field(default_factory=MirrorConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    http: HttpConfig = field(default_factory=HttpConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        mirror = _get_table(data, "mirror")
        cache = _get_table(data, "cache")
        http = _get_table(data, "http")

        manifest_url = _get_str(mirror, "manifest_url") or DEFAULT_MANIFEST_URL
        cache_dir = _get_str(cache, "dir")
        temp_dir = _get_str(cache, "temp_dir")

        return cls(
            mirror=MirrorConfig(
                manifest_url=manifest_url,
                # Artifacts are served from the listing host unless told otherwise.
                download_url=_get_str(mirror, "download_url") or manifest_url,
            ),
            cache=CacheConfig(
                dir=Path(cache_dir).expanduser() if cache_dir else None,
                temp_dir=Path(temp_dir).expanduser() if temp_dir else None,
            ),
            http=HttpConfig(
                timeout=_get_float(http, "timeout") or DEFAULT_TIMEOUT,
                user_agent=_get_str(http, "user_agent") or DEFAULT_USER_AGENT,
            ),
        )

    def with_env(self, environ: Mapping[str, str]) -> Config:
        """Return a copy with environment overrides applied.

        Raises:
            ValueError: If SETUP_BLENDER_TIMEOUT is not a number.
        """
        mirror = self.mirror
        manifest_url = environ.get(ENV_MANIFEST_URL, "").strip()
        if manifest_url:
            # A download URL that was only following the manifest keeps following it
            follows = mirror.download_url == mirror.manifest_url
            mirror = dataclasses.replace(mirror, manifest_url=manifest_url)
            if follows:
                mirror = dataclasses.replace(mirror, download_url=manifest_url)
        download_url = environ.get(ENV_DOWNLOAD_URL, "").strip()
        if download_url:
            mirror = dataclasses.replace(mirror, download_url=download_url)

        cache = self.cache
        tool_cache = environ.get(ENV_TOOL_CACHE, "").strip()
        if tool_cache:
            cache = dataclasses.replace(cache, dir=Path(tool_cache))
        temp = environ.get(ENV_TEMP, "").strip()
        if temp:
            cache = dataclasses.replace(cache, temp_dir=Path(temp))

        http = self.http
        timeout = environ.get(ENV_TIMEOUT, "").strip()
        if timeout:
            http = dataclasses.replace(http, timeout=float(timeout))

        return Config(mirror=mirror, cache=cache, http=http)


def _get_table(table: Mapping[str, object], key: str) -> StrDict:
    value = table.get(key)
    if isinstance(value, dict):
        return {str(k): v for k, v in value.items()}  # pyright: ignore[reportUnknownVariableType]
    return {}


def _get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a stripped, non-empty string value or None."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _get_float(table: Mapping[str, object], key: str) -> float | None:
    value = table.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        data: StrDict = tomllib.loads(path.read_bytes().decode("utf-8"))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to setup-blender.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(
    path: Path | None,
    environ: Mapping[str, str],
) -> Result[Config, ConfigError]:
    """Load config (or defaults when the file is absent) and apply env overrides.

    An explicitly given path that does not exist is an error; the implicit
    ``./setup-blender.toml`` is optional.
    """
    if path is None:
        implicit = Path.cwd() / CONFIG_FILENAME
        if implicit.is_file():
            path = implicit

    config = Config()
    if path is not None:
        result = load_config(path)
        if isinstance(result, Err):
            return result
        config = result.value

    try:
        return Ok(config.with_env(environ))
    except ValueError as e:
        return Err(ConfigError(f"Invalid {ENV_TIMEOUT}: {e}"))
