"""Shared exception hierarchy for ScamVigil."""

from __future__ import annotations

from .auth import NotSignedInError
from .backend import BackendError, PersistenceWarning
from .base import VigilError
from .config import ConfigError, NotConfiguredError
from .request import MissingInputError, UnknownActionError

__all__ = [
    "BackendError",
    "ConfigError",
    "MissingInputError",
    "NotConfiguredError",
    "NotSignedInError",
    "PersistenceWarning",
    "UnknownActionError",
    "VigilError",
]
