"""Tests for core/config.py - TOML configuration and env overrides."""

from pathlib import Path

import pytest

from sb.core.config import (
    CONFIG_FILENAME,
    DEFAULT_MANIFEST_URL,
    DEFAULT_TIMEOUT,
    Config,
    ConfigError,
    load_config,
    load_config_or_default,
)
from sb.core.result import Err, Ok


# =============================================================================
# Defaults and from_dict
# =============================================================================


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.mirror.manifest_url == DEFAULT_MANIFEST_URL
        assert config.mirror.download_url == DEFAULT_MANIFEST_URL
        assert config.cache.dir is None
        assert config.cache.temp_dir is None
        assert config.http.timeout == DEFAULT_TIMEOUT
        assert config.http.user_agent.startswith("setup-blender/")

    def test_from_empty_dict(self) -> None:
        assert Config.from_dict({}) == Config()


class TestConfigFromDict:
    def test_full(self) -> None:
        config = Config.from_dict(
            {
                "mirror": {
                    "manifest_url": "https://mirror.example/blender/release",
                    "download_url": "https://cdn.example/blender/release",
                },
                "cache": {"dir": "/opt/cache", "temp_dir": "/tmp/sb"},
                "http": {"timeout": 5, "user_agent": "ci-bot"},
            }
        )
        assert config.mirror.manifest_url == "https://mirror.example/blender/release"
        assert config.mirror.download_url == "https://cdn.example/blender/release"
        assert config.cache.dir == Path("/opt/cache")
        assert config.cache.temp_dir == Path("/tmp/sb")
        assert config.http.timeout == 5.0
        assert config.http.user_agent == "ci-bot"

    def test_download_url_defaults_to_manifest_url(self) -> None:
        config = Config.from_dict({"mirror": {"manifest_url": "https://m.example/r/"}})
        assert config.mirror.download_url == "https://m.example/r/"

    def test_wrong_types_fall_back_to_defaults(self) -> None:
        config = Config.from_dict(
            {"mirror": "not-a-table", "http": {"timeout": True, "user_agent": 3}}
        )
        assert config.mirror.manifest_url == DEFAULT_MANIFEST_URL
        assert config.http.timeout == DEFAULT_TIMEOUT
        assert config.http.user_agent.startswith("setup-blender/")

    def test_blank_strings_ignored(self) -> None:
        config = Config.from_dict({"mirror": {"manifest_url": "   "}})
        assert config.mirror.manifest_url == DEFAULT_MANIFEST_URL


# =============================================================================
# Environment overrides
# =============================================================================


class TestWithEnv:
    def test_runner_variables(self) -> None:
        config = Config().with_env({"RUNNER_TOOL_CACHE": "/hostedtoolcache", "RUNNER_TEMP": "/rt"})
        assert config.cache.dir == Path("/hostedtoolcache")
        assert config.cache.temp_dir == Path("/rt")

    def test_mirror_overrides(self) -> None:
        config = Config().with_env(
            {
                "SETUP_BLENDER_MANIFEST_URL": "https://a.example/",
                "SETUP_BLENDER_DOWNLOAD_URL": "https://b.example/",
            }
        )
        assert config.mirror.manifest_url == "https://a.example/"
        assert config.mirror.download_url == "https://b.example/"

    def test_manifest_override_moves_download_url(self) -> None:
        config = Config().with_env({"SETUP_BLENDER_MANIFEST_URL": "https://other.example/"})
        assert config.mirror.manifest_url == "https://other.example/"
        assert config.mirror.download_url == "https://other.example/"

    def test_manifest_override_keeps_explicit_download_url(self) -> None:
        config = Config.from_dict(
            {"mirror": {"download_url": "https://cdn.example/"}}
        ).with_env({"SETUP_BLENDER_MANIFEST_URL": "https://other.example/"})
        assert config.mirror.manifest_url == "https://other.example/"
        assert config.mirror.download_url == "https://cdn.example/"

    def test_timeout(self) -> None:
        assert Config().with_env({"SETUP_BLENDER_TIMEOUT": "2.5"}).http.timeout == 2.5

    def test_bad_timeout_raises(self) -> None:
        with pytest.raises(ValueError):
            Config().with_env({"SETUP_BLENDER_TIMEOUT": "soon"})

    def test_empty_values_ignored(self) -> None:
        assert Config().with_env({"RUNNER_TOOL_CACHE": "  "}) == Config()


# =============================================================================
# Loading
# =============================================================================


class TestLoadConfig:
    def test_load_valid(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text('[mirror]\nmanifest_url = "https://m.example/"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.mirror.manifest_url == "https://m.example/"

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nope.toml"
        result = load_config(path)

        assert isinstance(result, Err)
        assert "not found" in result.error.message
        assert result.error.path == path

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[mirror\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in str(result.error)


class TestLoadConfigOrDefault:
    def test_no_file_gives_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config_or_default(None, {}) == Ok(Config())

    def test_implicit_file_in_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[http]\ntimeout = 9\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        result = load_config_or_default(None, {})

        assert isinstance(result, Ok)
        assert result.value.http.timeout == 9.0

    def test_explicit_missing_file_is_error(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path / "missing.toml", {})
        assert isinstance(result, Err)

    def test_env_applied_over_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[cache]\ndir = "/from/file"\n', encoding="utf-8")

        result = load_config_or_default(path, {"RUNNER_TOOL_CACHE": "/from/env"})

        assert isinstance(result, Ok)
        assert result.value.cache.dir == Path("/from/env")

    def test_bad_env_timeout_is_config_error(self, tmp_path: Path) -> None:
        config_path = tmp_path / "ok.toml"
        config_path.write_text("", encoding="utf-8")

        result = load_config_or_default(config_path, {"SETUP_BLENDER_TIMEOUT": "forever"})

        assert isinstance(result, Err)
        assert isinstance(result.error, ConfigError)
        assert "SETUP_BLENDER_TIMEOUT" in result.error.message

    def test_manifest_env_only(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Listing and downloads both move to the overriding mirror."""
        monkeypatch.chdir(tmp_path)

        result = load_config_or_default(None, {"SETUP_BLENDER_MANIFEST_URL": "https://other/"})

        assert isinstance(result, Ok)
        assert result.value.mirror.download_url == "https://other/"
