"""Small shared helpers."""

from .platforms import infer_platform_from_url

__all__ = ["infer_platform_from_url"]
