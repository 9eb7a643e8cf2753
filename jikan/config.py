"""Configuration for the jikan CLI.

Loads from YAML config file with environment variable overrides.
Pattern: JIKAN__{KEY} overrides top-level YAML keys.
Example: JIKAN__LOG_LEVEL=DEBUG

JIKAN_HOME points the tool at a different timesheet directory.
A .env file in the working directory is read first.
"""

import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

APP_NAME = "jikan"
ENV_PREFIX = "JIKAN"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _home() -> Path:
    return Path(os.path.expanduser("~"))


def default_data_dir() -> Path:
    """Platform local-data directory for timesheets."""
    if sys.platform == "win32":
        base = os.getenv("LOCALAPPDATA") or str(_home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = str(_home() / "Library" / "Application Support")
    else:
        base = os.getenv("XDG_DATA_HOME") or str(_home() / ".local" / "share")
    return Path(base) / APP_NAME


def default_config_path() -> Path:
    if sys.platform == "win32":
        base = os.getenv("APPDATA") or str(_home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = str(_home() / "Library" / "Application Support")
    else:
        base = os.getenv("XDG_CONFIG_HOME") or str(_home() / ".config")
    return Path(base) / APP_NAME / "config.yml"


class Settings(BaseModel):
    data_dir: Path = Field(default_factory=default_data_dir)
    log_level: str = "WARNING"
    default_project: Optional[str] = None  # skips the project prompt

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    @field_validator("data_dir")
    @classmethod
    def _expand_dir(cls, value: Path) -> Path:
        return value.expanduser()


def _apply_env_overrides(config_dict: dict, prefix: str = ENV_PREFIX) -> dict:
    """Apply environment variable overrides to config dict.

    Pattern: JIKAN__KEY=value maps to config[key] = value
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}__"):
            continue
        config_dict[key[len(prefix) + 2 :].lower()] = value
    return config_dict


def load_config(config_path: Optional[str] = None, dotenv: bool = True) -> Settings:
    """Load configuration from YAML file with env overrides.

    Priority: JIKAN_HOME > JIKAN__* env vars > YAML file > defaults
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    config_dict = {}

    # 1. Load YAML if exists
    if config_path is None:
        config_path = os.getenv("JIKAN_CONFIG") or str(default_config_path())
    path = Path(config_path)
    if path.exists():
        try:
            with open(path) as f:
                config_dict = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Config {path} must be a mapping of settings, got {type(config_dict).__name__}"
            )

    # 2. Apply env overrides
    config_dict = _apply_env_overrides(config_dict)

    # 3. Storage directory from dedicated env var
    home = os.getenv("JIKAN_HOME")
    if home:
        config_dict["data_dir"] = home

    try:
        return Settings(**config_dict)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration ({path}, {ENV_PREFIX}__* overrides): {e}") from e
