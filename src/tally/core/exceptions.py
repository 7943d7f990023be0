"""Tally exception hierarchy."""

from __future__ import annotations


class TallyError(Exception):
    """Base exception for all Tally errors."""


class ConfigError(TallyError):
    """Raised when the configuration is invalid or cannot be read."""


class TerminalError(TallyError):
    """Raised when no interactive terminal is available."""


class StatePoisonedError(TallyError):
    """Raised when the counter state was left inconsistent by a failed update."""
