"""Exceptions for malformed inbound requests."""

from __future__ import annotations

from scamvigil.exceptions.base import VigilError


class MissingInputError(VigilError, ValueError):
    """Raised when a request field is missing, empty, or has the wrong type."""


class UnknownActionError(VigilError):
    """Raised when a request carries an unrecognized action tag."""

    def __init__(self, action: object) -> None:
        self.action = action
        super().__init__(f"Unknown action: {action}")
