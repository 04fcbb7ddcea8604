"""Tests for Config"""
import os

import pytest

from git_workspace_keeper.config import Config
from git_workspace_keeper.models.workspace import Convention


class TestConfigValidation:
    """Test configuration validation."""

    def test_defaults(self):
        config = Config()
        assert config.root == os.getcwd()
        assert config.workspace_convention is Convention.BARE
        assert config.timeout == 30.0

    def test_invalid_convention(self):
        with pytest.raises(ValueError, match="convention must be one of"):
            Config(convention="monorepo")

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="timeout must be positive"):
            Config(timeout=0)

    def test_invalid_workers(self):
        with pytest.raises(ValueError, match="workers must be positive"):
            Config(workers=0)

    def test_empty_root(self):
        with pytest.raises(ValueError, match="root cannot be empty"):
            Config(root="  ")

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"convention": "container", "stale_days": 10})
        assert config.workspace_convention is Convention.CONTAINER
        assert config.get("stale_days") is None

    def test_to_dict_round_trip(self):
        config = Config(root="/srv/ws", convention="container", workers=3)
        assert Config.from_dict(config.to_dict()) == config

    def test_relative_root_made_absolute(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert Config(root="ws").root == os.path.join(os.getcwd(), "ws")
