"""Request routing, scan handlers, result normalization, and caching."""

from .cache import ResultCache
from .handlers import ScanHandlers
from .router import RequestRouter

__all__ = ["RequestRouter", "ResultCache", "ScanHandlers"]
