"""Tests for the chestnav configuration system."""

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from chestnav.core.config import (
    ChestNavConfig,
    create_config_sources,
    find_config_files,
    get_config,
    set_config,
)
from chestnav.core.config.settings_sources import (
    JsonConfigSettingsSource,
    TomlConfigSettingsSource,
    YamlConfigSettingsSource,
    deep_merge,
)
from core.types import Theme


class TestDefaults:
    """Test cases for default values and validation."""

    def test_defaults(self):
        config = ChestNavConfig()

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 7474
        assert config.content.theme == Theme.LIGHT
        assert config.content.placeholder_page == "blank.html"
        assert config.content.home_tag == "Home"
        assert config.search.result_count == 50
        assert config.engine.factory is None
        assert not config.debug

    def test_theme_case_insensitive(self):
        assert ChestNavConfig(content={"theme": "dark"}).content.theme == Theme.DARK

    def test_invalid_theme(self):
        with pytest.raises(ValidationError):
            ChestNavConfig(content={"theme": "sepia"})

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            ChestNavConfig(server={"port": 0})

    def test_to_dict_drops_unset_optionals(self):
        data = ChestNavConfig().to_dict()

        assert data["content"]["theme"] == "Light"
        assert "factory" not in data["engine"]

    def test_access_token_is_masked_in_dict(self):
        config = ChestNavConfig(server={"access_token": "s3cret"})

        assert config.server.access_token.get_secret_value() == "s3cret"
        assert "s3cret" not in json.dumps(config.to_dict())


class TestHierarchicalLoading:
    """Test cases for ChestNavConfig.load_hierarchical."""

    def test_environment_variables(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CHESTNAV_SERVER__PORT", "8080")
        monkeypatch.setenv("CHESTNAV_CONTENT__THEME", "dark")
        monkeypatch.setenv("CHESTNAV_DEBUG", "true")
        monkeypatch.setenv("CHESTNAV_SERVER__ACCESS_TOKEN", "from-env")

        config = ChestNavConfig.load_hierarchical(project_dir=tmp_path)

        assert config.server.port == 8080
        assert config.content.theme == Theme.DARK
        assert config.debug
        assert config.server.access_token.get_secret_value() == "from-env"

    def test_project_yaml_file(self, tmp_path):
        (tmp_path / "chestnav.yaml").write_text(yaml.safe_dump({"search": {"result_count": 10}}))

        config = ChestNavConfig.load_hierarchical(project_dir=tmp_path)

        assert config.search.result_count == 10

    def test_project_json_file(self, tmp_path):
        (tmp_path / ".chestnav.json").write_text(json.dumps({"content": {"home_tag": "Start"}}))

        assert ChestNavConfig.load_hierarchical(project_dir=tmp_path).content.home_tag == "Start"

    def test_user_file_below_project_file(self, tmp_path):
        user_dir = Path.home() / ".chestnav"
        user_dir.mkdir()
        (user_dir / "config.json").write_text(json.dumps({"server": {"port": 9000, "host": "0.0.0.0"}}))
        (tmp_path / ".chestnav.json").write_text(json.dumps({"server": {"port": 9100}}))

        config = ChestNavConfig.load_hierarchical(project_dir=tmp_path)

        assert config.server.port == 9100
        assert config.server.host == "0.0.0.0"

    def test_explicit_toml_file(self, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[engine]\nmanifest = "chests.yaml"\n')

        config = ChestNavConfig.load_hierarchical(project_dir=tmp_path, config_file=config_file)

        assert config.engine.manifest == "chests.yaml"

    def test_environment_beats_files(self, tmp_path, monkeypatch):
        (tmp_path / "chestnav.yaml").write_text(yaml.safe_dump({"server": {"port": 7000}}))
        monkeypatch.setenv("CHESTNAV_SERVER__PORT", "7100")

        assert ChestNavConfig.load_hierarchical(project_dir=tmp_path).server.port == 7100

    def test_overrides_beat_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CHESTNAV_SEARCH__RESULT_COUNT", "20")

        config = ChestNavConfig.load_hierarchical(project_dir=tmp_path, search={"result_count": 5})

        assert config.search.result_count == 5

    def test_save_to_file_round_trip(self, tmp_path):
        config = ChestNavConfig(server={"port": 8123})
        target = tmp_path / "out" / "config.json"

        config.save_to_file(target)

        loaded = ChestNavConfig.load_hierarchical(project_dir=tmp_path, config_file=target)
        assert loaded.server.port == 8123


class TestSettingsSources:
    """Test cases for the file settings sources."""

    def test_source_per_extension(self, tmp_path):
        sources = create_config_sources(
            ChestNavConfig,
            [tmp_path / "a.yaml", tmp_path / "b.toml", tmp_path / "c.json", tmp_path / "d.ini"],
        )

        assert [type(s) for s in sources] == [
            YamlConfigSettingsSource, TomlConfigSettingsSource, JsonConfigSettingsSource,
        ]

    def test_broken_file_is_skipped(self, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{not json")

        assert JsonConfigSettingsSource(ChestNavConfig, broken)() == {}

    def test_find_config_files(self, tmp_path):
        (tmp_path / "chestnav.toml").write_text("")
        (tmp_path / "other.toml").write_text("")

        assert find_config_files([tmp_path, tmp_path / "missing"]) == [tmp_path / "chestnav.toml"]

    def test_deep_merge(self):
        target = {"server": {"host": "a", "port": 1}, "debug": False}

        deep_merge(target, {"server": {"port": 2}, "debug": True})

        assert target == {"server": {"host": "a", "port": 2}, "debug": True}


class TestGlobalConfig:
    """Test cases for the global configuration instance."""

    def test_set_and_get(self):
        config = ChestNavConfig(debug=True)

        set_config(config)

        assert get_config() is config
