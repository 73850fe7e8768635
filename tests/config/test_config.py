"""
Tests for configuration models and the hierarchical ConfigManager.
"""

import json
import os
import logging
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from sitefilters.core.config import AppConfig, ConfigManager, FilterConfig, TemplateConfig
from sitefilters.core.exceptions import ConfigurationError, ErrorCode


class TestConfigModels:
    """Test pydantic model defaults and validation."""

    def test_defaults(self):
        config = AppConfig()

        assert config.filters.enabled is True
        assert config.filters.aliases == []
        assert config.templates.strict_undefined is True
        assert config.templates.search_paths == []
        assert config.log_level == "WARNING"
        assert config.load_entry_points is True

    def test_aliases_validated(self):
        assert FilterConfig(aliases=[" title_case ", "title_case", "tc"]).aliases == ["title_case", "tc"]

        with pytest.raises(ValidationError):
            FilterConfig(aliases=["not valid"])

    def test_log_level_normalized(self):
        assert AppConfig(log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError):
            AppConfig(log_level="LOUD")

    def test_get_log_level(self):
        assert AppConfig(log_level="INFO").get_log_level() == logging.INFO
        assert AppConfig(log_level="ERROR", verbose=True).get_log_level() == logging.DEBUG

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            AppConfig(unknown_option=True)

    def test_validate_assignment(self):
        config = AppConfig()
        with pytest.raises(ValidationError):
            config.log_level = "LOUD"

    def test_search_paths_coerced(self):
        config = TemplateConfig(search_paths=["templates"])
        assert config.search_paths == [Path("templates")]


@pytest.mark.usefixtures("isolated_env")
class TestConfigManager:
    """Test loading from files, environment and CLI arguments."""

    def test_defaults_without_sources(self):
        config = ConfigManager().load_config()
        assert config == AppConfig()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.safe_dump({
            'log_level': 'info',
            'filters': {'aliases': ['title_case']},
            'templates': {'strict_undefined': False},
        }))

        config = ConfigManager(path).load_config()

        assert config.log_level == "INFO"
        assert config.filters.aliases == ["title_case"]
        assert config.templates.strict_undefined is False

    def test_json_file(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({'verbose': True}))

        assert ConfigManager(path).load_config().verbose is True

    def test_default_search_path(self, isolated_env):
        (isolated_env / "sitefilters.yaml").write_text("filters:\n  aliases: [tc]\n")

        config = ConfigManager().load_config()

        assert config.filters.aliases == ["tc"]

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(tmp_path / "nope.yaml").load_config()
        assert exc_info.value.error_code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("filters: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(path).load_config()
        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID_FORMAT

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin.yaml"
        path.write_bytes(b"verbose: \xff\xfe\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(path).load_config()
        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID_FORMAT

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(path).load_config()

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("log_level: LOUD\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(path).load_config()
        assert exc_info.value.error_code == ErrorCode.CONFIG_SCHEMA_VALIDATION

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("log_level: INFO\nfilters:\n  aliases: [from_file]\n")
        monkeypatch.setenv("SITEFILTERS_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("SITEFILTERS_FILTER_ALIASES", "one, two")
        monkeypatch.setenv("SITEFILTERS_STRICT_UNDEFINED", "no")
        monkeypatch.setenv("SITEFILTERS_LOAD_ENTRY_POINTS", "false")

        config = ConfigManager(path).load_config()

        assert config.log_level == "ERROR"
        assert config.filters.aliases == ["one", "two"]
        assert config.templates.strict_undefined is False
        assert config.load_entry_points is False

    def test_template_paths_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SITEFILTERS_TEMPLATE_PATHS", os.pathsep.join(["a", "b"]))

        config = ConfigManager().load_config()

        assert config.templates.search_paths == [Path("a"), Path("b")]

    def test_cli_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("SITEFILTERS_VERBOSE", "false")
        monkeypatch.setenv("SITEFILTERS_FILTER_ALIASES", "env_alias")

        config = ConfigManager().load_config(cli_args={
            'verbose': True,
            'aliases': ['cli_alias'],
            'log_level': None,
            'unrelated': 'ignored',
        })

        assert config.verbose is True
        assert config.filters.aliases == ["cli_alias"]
        assert config.log_level == "WARNING"

    def test_save_config_round_trips(self, tmp_path):
        manager = ConfigManager()
        config = AppConfig(filters=FilterConfig(aliases=["tc"]), templates=TemplateConfig(search_paths=[tmp_path]))
        path = tmp_path / "saved.yaml"

        manager.save_config(path, config)

        assert ConfigManager(path).load_config() == config

    def test_config_property(self):
        manager = ConfigManager()
        assert manager.config is None
        loaded = manager.load_config()
        assert manager.config is loaded
