"""Root exception for ScamVigil."""

from __future__ import annotations


class VigilError(Exception):
    """Base class for all errors raised by this package."""
