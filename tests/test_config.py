"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import yaml

from profnet.config import Config


def test_defaults(tmp_path: Path):
    config = Config(workspace_path=tmp_path)
    assert config.hop_bound == 3
    assert config.growth_threshold == 5
    assert config.require_known_users is True
    assert config.db_path == tmp_path / "profnet.db"


def test_load_from_yaml(tmp_path: Path):
    (tmp_path / "config.yaml").write_text(
        yaml.dump({"hop_bound": 2, "growth_threshold": "10", "require_known_users": "no"})
    )
    config = Config.load(tmp_path)
    assert config.hop_bound == 2
    assert config.growth_threshold == 10
    assert config.require_known_users is False


def test_load_ignores_unknown_keys(tmp_path: Path):
    (tmp_path / "config.yaml").write_text(yaml.dump({"bogus": 1, "log_level": "DEBUG"}))
    config = Config.load(tmp_path)
    assert config.log_level == "DEBUG"
    assert not hasattr(config, "bogus")


def test_env_overrides(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("PROFNET_WORKSPACE", str(tmp_path))
    monkeypatch.setenv("PROFNET_LOG_LEVEL", "WARNING")
    config = Config.load()
    assert config.workspace_path == tmp_path
    assert config.log_level == "WARNING"


def test_explicit_path_beats_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("PROFNET_WORKSPACE", str(tmp_path / "elsewhere"))
    config = Config.load(tmp_path)
    assert config.workspace_path == tmp_path


def test_save_round_trip(tmp_path: Path):
    config = Config(workspace_path=tmp_path / "ws", hop_bound=4, require_known_users=False)
    config.save()
    loaded = Config.load(tmp_path / "ws")
    assert loaded.hop_bound == 4
    assert loaded.require_known_users is False
