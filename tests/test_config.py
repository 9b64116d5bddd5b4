"""Tests for config resolution."""

import json

import pytest

from enharmonic import config as config_module
from enharmonic.config import (
    EnharmonicConfig,
    DefaultsConfig,
    configure,
    get_config,
    reset_config,
)
from enharmonic.ledger.derivation import DEFAULT_PROGRAM_ID


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point config file at tmp_path and clear env overrides."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_dir / "config.json")
    for var in ("DB_PATH", "PROGRAM_ID", "MINT_DECIMALS", "MINT_SUPPLY_CAP"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield config_dir / "config.json"
    reset_config()


class TestEnharmonicConfig:
    def test_defaults(self, isolated_config):
        config = EnharmonicConfig.load()
        assert config.program.program_id == DEFAULT_PROGRAM_ID
        assert config.mint.decimals == 6
        assert config.mint.supply_cap is None
        assert config.db_path == "./storage/enharmonic.db"

    def test_file_values(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(
            json.dumps({"mint": {"supply_cap": 500}, "defaults": {"db_path": "x.db"}})
        )
        config = EnharmonicConfig.load()
        assert config.mint.supply_cap == 500
        assert config.db_path == "x.db"

    def test_env_overrides_file(self, isolated_config, monkeypatch):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(json.dumps({"defaults": {"db_path": "file.db"}}))
        monkeypatch.setenv("DB_PATH", "env.db")
        monkeypatch.setenv("MINT_DECIMALS", "2")
        monkeypatch.setenv("PROGRAM_ID", "custom")
        config = EnharmonicConfig.load()
        assert config.db_path == "env.db"
        assert config.mint.decimals == 2
        assert config.program.program_id == "custom"

    def test_invalid_int_env_is_ignored(self, isolated_config, monkeypatch):
        monkeypatch.setenv("MINT_SUPPLY_CAP", "lots")
        assert EnharmonicConfig.load().mint.supply_cap is None

    def test_corrupt_file_falls_back_to_defaults(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("{not json")
        assert EnharmonicConfig.load().db_path == "./storage/enharmonic.db"

    def test_save_round_trip(self, isolated_config):
        config = EnharmonicConfig()
        config.mint.supply_cap = 1000
        config.save()
        assert EnharmonicConfig.load().mint.supply_cap == 1000

    def test_unknown_keys_ignored(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(json.dumps({"mint": {"color": "blue"}}))
        config = EnharmonicConfig.load()
        assert not hasattr(config.mint, "color")


class TestGlobalConfig:
    def test_configure_replaces_singleton(self, isolated_config):
        custom = EnharmonicConfig(defaults=DefaultsConfig(db_path=":memory:"))
        configure(custom)
        assert get_config() is custom

    def test_get_config_caches(self, isolated_config):
        assert get_config() is get_config()
