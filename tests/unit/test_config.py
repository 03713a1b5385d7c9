"""Tests for Settings and project configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from swintegrity.config import ConfigError, Settings, load_integrity_config
from tests._data import BUNDLE_KEY, CSS_KEY


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.chdir(tmp_path)
        settings = Settings()
        assert settings.root == Path(".")
        assert settings.config_file == Path("swintegrity.toml")
        assert settings.log_level == "INFO"
        assert settings.debug is False

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SWINTEGRITY_ROOT", "/srv/app")
        monkeypatch.setenv("SWINTEGRITY_LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.root == Path("/srv/app")
        assert settings.log_level == "DEBUG"
        assert settings.config_path == Path("/srv/app/swintegrity.toml")

    def test_absolute_config_file(self, tmp_path: Path):
        settings = Settings(root=tmp_path, config_file=Path("/etc/sw.toml"))
        assert settings.config_path == Path("/etc/sw.toml")


class TestLoadIntegrityConfig:
    def test_loads_project_file(self, web_project: Path):
        config = load_integrity_config(Settings(root=web_project))
        assert config.root == web_project
        assert [r.cache_key for r in config.resources] == [BUNDLE_KEY, CSS_KEY]
        assert config.resources[0].path == Path("dist/bundle.js")
        assert config.host_path == web_project / "service-worker.js"
        assert len(config.version_targets) == 2
        assert config.release.commit_message == "Version bump to {version}"

    def test_defaults_without_config(self, tmp_path: Path):
        config = load_integrity_config(Settings(root=tmp_path))
        assert config.host_artifact == Path("service-worker.js")
        assert config.manifest_name == "RESOURCE_INTEGRITY"
        assert [r.path for r in config.resources] == [
            Path("dist/bundle.js"),
            Path("css/main.min.css"),
        ]
        assert config.release.remote == "origin"

    def test_pyproject_tool_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.swintegrity]\nhost_artifact = "sw.js"\n\n'
            '[tool.swintegrity.resources]\n"/app.js?v=1" = "app.js"\n',
            encoding="utf-8",
        )
        config = load_integrity_config(Settings(root=tmp_path))
        assert config.host_artifact == Path("sw.js")
        assert [r.cache_key for r in config.resources] == ["/app.js?v=1"]

    def test_list_form_resources(self, tmp_path: Path):
        (tmp_path / "swintegrity.toml").write_text(
            '[[resources]]\ncache_key = "/a.js?v=1"\npath = "a.js"\n',
            encoding="utf-8",
        )
        config = load_integrity_config(Settings(root=tmp_path))
        assert config.resources[0].cache_key == "/a.js?v=1"

    def test_duplicate_cache_keys_rejected(self, tmp_path: Path):
        (tmp_path / "swintegrity.toml").write_text(
            '[[resources]]\ncache_key = "/a.js?v=1"\npath = "a.js"\n'
            '[[resources]]\ncache_key = "/a.js?v=1"\npath = "b.js"\n',
            encoding="utf-8",
        )
        with pytest.raises(ConfigError, match="duplicate cache keys"):
            load_integrity_config(Settings(root=tmp_path))

    def test_invalid_toml(self, tmp_path: Path):
        (tmp_path / "swintegrity.toml").write_text("resources = [", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_integrity_config(Settings(root=tmp_path))

    def test_bad_version_target(self, tmp_path: Path):
        (tmp_path / "swintegrity.toml").write_text(
            '[[version_targets]]\npath = "index.html"\n', encoding="utf-8"
        )
        with pytest.raises(ConfigError, match="exactly one"):
            load_integrity_config(Settings(root=tmp_path))

    def test_uncompilable_pattern_rejected_at_load(self, tmp_path: Path):
        (tmp_path / "swintegrity.toml").write_text(
            "[[version_targets]]\n"
            'path = "service-worker.js"\n'
            "pattern = '(const VERSION = \"[^\"]*\"'\n"
            "replacement = 'const VERSION = \"{version}\"'\n",
            encoding="utf-8",
        )
        with pytest.raises(ConfigError, match="invalid pattern"):
            load_integrity_config(Settings(root=tmp_path))
