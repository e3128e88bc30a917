"""Profnet configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass
class Config:
    """Profnet configuration."""

    workspace_path: Path = field(default_factory=lambda: Path.home() / ".profnet")
    log_level: str = "INFO"
    wal_mode: bool = True

    # Growth bound: past this many accepted connections, new targets must be
    # within hop_bound hops.
    hop_bound: int = 3
    growth_threshold: int = 5

    require_known_users: bool = True

    @classmethod
    def load(cls, workspace_path: Path | None = None) -> Config:
        """Load config from defaults, env vars, then the workspace YAML file."""
        config = cls()

        if workspace_path:
            config.workspace_path = workspace_path

        env_path = os.environ.get("PROFNET_WORKSPACE")
        if env_path and workspace_path is None:
            config.workspace_path = Path(env_path)

        env_log = os.environ.get("PROFNET_LOG_LEVEL")
        if env_log:
            config.log_level = env_log

        config_file = config.workspace_path / "config.yaml"
        if config_file.exists():
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
            for key, value in data.items():
                if key == "workspace_path" or not hasattr(config, key):
                    continue
                expected_type = type(getattr(config, key))
                if expected_type is bool and isinstance(value, str):
                    setattr(config, key, value.strip().lower() in ("1", "true", "yes", "on"))
                else:
                    setattr(config, key, expected_type(value))

        return config

    @property
    def db_path(self) -> Path:
        return self.workspace_path / "profnet.db"

    def save(self) -> None:
        """Save current config to YAML."""
        self.workspace_path.mkdir(parents=True, exist_ok=True)
        config_file = self.workspace_path / "config.yaml"
        data = {
            "log_level": self.log_level,
            "wal_mode": self.wal_mode,
            "hop_bound": self.hop_bound,
            "growth_threshold": self.growth_threshold,
            "require_known_users": self.require_known_users,
        }
        with open(config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
