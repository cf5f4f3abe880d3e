"""Configuration-related exceptions."""

from __future__ import annotations

from scamvigil.exceptions.base import VigilError


class ConfigError(VigilError, ValueError):
    """Raised when operator configuration is invalid."""


class NotConfiguredError(VigilError):
    """Raised when no backend base URL is configured."""

    def __init__(self, message: str = "ScamVigil backend URL is not configured (backendUrl).") -> None:
        super().__init__(message)
