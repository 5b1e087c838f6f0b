"""Tests for storeops/common/config_loader.py"""

from unittest.mock import patch

import pytest

from storeops.common.config_loader import (
    DEFAULT_SETTINGS,
    load_config,
    load_extractor_settings,
    load_importer_settings,
    load_server_settings,
    load_tagging_settings,
)


class TestLoadFromConfigFiles:
    """Tests that load the real config YAML from the repo."""

    def test_console_config_is_a_dict(self):
        config = load_config("console.yaml")
        assert isinstance(config, dict)
        assert "tagging" in config

    def test_tagging_defaults(self):
        settings = load_tagging_settings()
        assert settings["default_prefix"] == "cus-"
        assert settings["output_filename"] == "Master_Updated_With_Tags.csv"
        assert settings["require_title_or_tags"] is True

    def test_importer_delay(self):
        assert load_importer_settings()["delay_seconds"] == 0.5

    def test_extractor_limit(self):
        assert load_extractor_settings()["limit"] == 250

    def test_server_port(self):
        assert isinstance(load_server_settings()["port"], int)

    def test_load_config_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent_file.yaml")


class TestDefaults:
    def test_missing_file_falls_back_to_defaults(self):
        with patch("storeops.common.config_loader.load_config", side_effect=FileNotFoundError):
            assert load_tagging_settings() == DEFAULT_SETTINGS["tagging"]

    def test_partial_section_is_merged(self):
        config = {"importer": {"delay_seconds": 2}}
        with patch("storeops.common.config_loader.load_config", return_value=config):
            settings = load_importer_settings()
        assert settings["delay_seconds"] == 2
        assert settings["api_version"] == DEFAULT_SETTINGS["importer"]["api_version"]

    def test_defaults_not_mutated(self):
        config = {"server": {"port": 1}}
        with patch("storeops.common.config_loader.load_config", return_value=config):
            load_server_settings()
        assert DEFAULT_SETTINGS["server"]["port"] == 8787
