"""Configuration management for cmdengine.

Loads YAML settings (settings.yaml) and environment variables (.env)
from a config directory. Property getters provide typed access with
defaults for the interactive shell and for logging.

Key classes:
    Config: Central configuration manager.

Key functions:
    get_config: Accessor for the process-wide Config instance.
    reset_config: Drop the cached instance (used by tests).
"""

import logging
import os
from pathlib import Path
from typing import Optional

import structlog
import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = structlog.get_logger("cmdengine.config")

USER_LEVEL_ENV = "CMDENGINE_USER_LEVEL"
CONFIG_DIR_ENV = "CMDENGINE_CONFIG_DIR"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """Central configuration manager for cmdengine.

    Args:
        config_dir: Directory holding settings.yaml and .env. Defaults
            to ``$CMDENGINE_CONFIG_DIR`` or ``~/.config/cmdengine``.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            configured = os.environ.get(CONFIG_DIR_ENV)
            if configured:
                config_dir = Path(configured).expanduser()
            else:
                config_dir = Path.home() / ".config" / "cmdengine"
        self.config_dir = Path(config_dir)

        env_file = self.config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.settings = self._load_yaml("settings.yaml")
        logger.debug("config_loaded", config_dir=str(self.config_dir))

    def _load_yaml(self, filename: str) -> dict:
        """Load a YAML configuration file."""
        filepath = self.config_dir / filename
        if filepath.exists():
            try:
                with open(filepath, "r") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    f"{filename} is not valid YAML: {exc}", setting_name=filename
                ) from exc
            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"{filename} must contain a mapping", setting_name=filename
                )
            return data
        return {}

    def _section(self, name: str) -> dict:
        section = self.settings.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"{name} must be a mapping", setting_name=name)
        return section

    def _int_setting(self, raw, source: str) -> int:
        if isinstance(raw, bool):
            raise ConfigurationError(f"{source} must be an integer", setting_name=source)
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"{source} must be an integer, got {raw!r}", setting_name=source
            ) from None

    def validate(self) -> None:
        """Check settings that would otherwise fail later at runtime.

        Raises:
            ConfigurationError: On a non-integer user level, log file
                size or backup count, or an unknown logging level.
        """
        _ = self.user_level
        _ = self.logging_max_file_size_mb
        _ = self.logging_backup_count
        level = self.logging_level
        if level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(
                f"unknown logging level {level!r}", setting_name="logging.level"
            )

    @property
    def user_level(self) -> int:
        """Authorization level of the shell user. Env var takes precedence."""
        raw = os.environ.get(USER_LEVEL_ENV)
        source = USER_LEVEL_ENV
        if raw is None:
            raw = self._section("shell").get("user_level", 0)
            source = "shell.user_level"
        return self._int_setting(raw, source)

    @property
    def prompt(self) -> str:
        """Prompt printed before each shell line."""
        return self._section("shell").get("prompt", "> ")

    @property
    def log_dir(self) -> Optional[Path]:
        """Directory for the rotating log file; None disables file logging."""
        configured = self._section("logging").get("dir")
        if configured:
            return Path(configured).expanduser()
        return None

    @property
    def logging_level(self) -> str:
        """Log level name (default INFO)."""
        return str(self._section("logging").get("level", "INFO"))

    @property
    def logging_level_number(self) -> int:
        return getattr(logging, self.logging_level.upper(), logging.INFO)

    @property
    def logging_max_file_size_mb(self) -> int:
        """Max size per log file in MB before rotation (default 10)."""
        return self._int_setting(
            self._section("logging").get("max_file_size_mb", 10),
            "logging.max_file_size_mb",
        )

    @property
    def logging_backup_count(self) -> int:
        """Number of rotated log files to keep (default 5)."""
        return self._int_setting(
            self._section("logging").get("backup_count", 5),
            "logging.backup_count",
        )


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the process-wide configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None
