"""Configuration loading and normalization for the ScamVigil host."""

from __future__ import annotations

from scamvigil.config.loader import load_config
from scamvigil.config.model import VigilConfig

__all__ = ["VigilConfig", "load_config"]
