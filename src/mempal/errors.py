from __future__ import annotations


class MempalError(Exception):
    """Base class for errors raised by mempal."""


class ConfigError(MempalError, ValueError):
    """Raised when a dungeon generator configuration is malformed."""
