"""Tally configuration: Pydantic model and loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from tally.core.constants import (
    CONFIG_FILENAME,
    DEFAULT_POLL_TIMEOUT_MS,
    LOG_FILENAME,
    MAX_POLL_TIMEOUT_MS,
    MIN_POLL_TIMEOUT_MS,
    TALLY_DIR_NAME,
)
from tally.core.exceptions import ConfigError


def tally_dir() -> Path:
    """Return the Tally config directory (~/.tally). Not created here."""
    return Path.home() / TALLY_DIR_NAME


# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class LoopConfig(BaseModel):
    poll_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS

    @field_validator("poll_timeout_ms")
    @classmethod
    def validate_poll_timeout(cls, v: int) -> int:
        if not (MIN_POLL_TIMEOUT_MS <= v <= MAX_POLL_TIMEOUT_MS):
            raise ValueError(
                f"poll_timeout_ms must be between {MIN_POLL_TIMEOUT_MS} and {MAX_POLL_TIMEOUT_MS}"
            )
        return v

    @property
    def poll_timeout(self) -> float:
        """Poll timeout in seconds."""
        return self.poll_timeout_ms / 1000


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    format: str = "text"  # "text" | "json"
    file: str = ""  # empty → ~/.tally/tally.log

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------


class TallyConfig(BaseModel):
    """Root Tally configuration model. Every field has a default."""

    loop: LoopConfig = Field(default_factory=LoopConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def log_path(self) -> Path:
        if self.logging.file:
            return Path(self.logging.file).expanduser()
        return tally_dir() / LOG_FILENAME


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------


def _config_file_path() -> Path:
    if env_path := os.environ.get("TALLY_CONFIG"):
        return Path(env_path)
    return tally_dir() / CONFIG_FILENAME


def load_config(path: Path | None = None) -> TallyConfig:
    """
    Load TallyConfig from an optional TOML file, overlaid with environment variables.

    Priority (highest to lowest):
      1. Environment variables (TALLY_*)
      2. Config file (~/.tally/config.toml)
      3. Built-in defaults

    A missing file is not an error: Tally runs with no configuration at all.
    """
    import tomllib

    cfg_path = path or _config_file_path()

    data: dict[str, Any] = {}
    if cfg_path.exists():
        try:
            with open(cfg_path, "rb") as f:
                data = tomllib.load(f)
        except Exception as exc:
            raise ConfigError(f"Cannot read config file {cfg_path}: {exc}") from exc

    try:
        _apply_env_overrides(data)
        return TallyConfig.model_validate(data)
    except Exception as exc:
        raise ConfigError(f"Invalid config at {cfg_path}: {exc}") from exc


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Overlay TALLY_* environment variables onto the parsed TOML data."""
    if level := os.environ.get("TALLY_LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = level
    if log_file := os.environ.get("TALLY_LOG_FILE"):
        data.setdefault("logging", {})["file"] = log_file
    if timeout := os.environ.get("TALLY_POLL_TIMEOUT_MS"):
        data.setdefault("loop", {})["poll_timeout_ms"] = int(timeout)
