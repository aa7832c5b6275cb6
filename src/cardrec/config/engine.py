"""Engine settings loaded from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Final

from .errors import ConfigurationError

FIRST_PARTY_SOURCES_ENV: Final[str] = "CARDREC_FIRST_PARTY_SOURCES"
LOG_LEVEL_ENV: Final[str] = "CARDREC_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[int] = logging.INFO


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings shared by the CLI and embedding services.

    ``first_party_sources`` lists source systems whose imports rank as
    ``first_party`` when no explicit precedence is supplied.
    """

    first_party_sources: frozenset[str] = field(default_factory=frozenset[str])
    log_level: int = DEFAULT_LOG_LEVEL


def get_engine_config() -> EngineConfig:
    return EngineConfig(
        first_party_sources=_parse_source_list(os.getenv(FIRST_PARTY_SOURCES_ENV)),
        log_level=_parse_log_level(os.getenv(LOG_LEVEL_ENV)),
    )


def _parse_source_list(value: str | None) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(item.strip().lower() for item in value.split(",") if item.strip())


def _parse_log_level(value: str | None) -> int:
    if value is None or not value.strip():
        return DEFAULT_LOG_LEVEL
    normalized = value.strip().upper()
    if normalized.isdigit():
        return int(normalized)
    level = logging.getLevelNamesMapping().get(normalized)
    if level is None:
        raise ConfigurationError(f"Invalid log level in {LOG_LEVEL_ENV}: {value!r}")
    return level
