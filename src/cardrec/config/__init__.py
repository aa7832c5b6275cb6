"""Application configuration helpers."""

from __future__ import annotations

from cardrec.common.logging import configure_logging

from .engine import EngineConfig, get_engine_config
from .errors import ConfigurationError

__all__ = [
    "ConfigurationError",
    "EngineConfig",
    "configure_logging",
    "get_engine_config",
]
