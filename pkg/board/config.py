# Project board — configuration
# Override defaults via board.yaml (or the file named by BOARD_CONFIG).

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .markup import DEFAULT_MARKUP

CONFIG_PATH = Path("board.yaml")


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


@dataclass
class BoardConfig:
    """Runtime configuration for the board server."""

    host: str = "127.0.0.1"
    port: int = 3000

    # Name of the env var holding the API key; empty value disables auth
    api_secret_env: str = "BOARD_API_SECRET"

    # Custom template markup (empty = built-in)
    markup_path: str = ""

    log_level: str = "INFO"

    @property
    def api_secret(self) -> str:
        return os.environ.get(self.api_secret_env, "").strip()

    def load_markup(self) -> str:
        if not self.markup_path:
            return DEFAULT_MARKUP
        path = Path(self.markup_path).expanduser()
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read markup_path {path}: {e}")

    @classmethod
    def load(cls, path: Optional[str] = None) -> "BoardConfig":
        """Load config from YAML, falling back to defaults when the file is absent."""
        cfg_path = Path(path or os.environ.get("BOARD_CONFIG") or CONFIG_PATH)
        if not cfg_path.exists():
            return cls()

        try:
            with open(cfg_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {cfg_path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"{cfg_path} must contain a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        cfg = cls(**{k: v for k, v in data.items() if k in known})
        try:
            cfg.port = int(cfg.port)
        except (TypeError, ValueError):
            raise ConfigError(f"port must be an integer, got: {cfg.port!r}")
        cfg.log_level = str(cfg.log_level).upper()
        return cfg
