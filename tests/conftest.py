from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from cardrec.config.engine import FIRST_PARTY_SOURCES_ENV, LOG_LEVEL_ENV


@pytest.fixture(autouse=True)
def _isolated_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(FIRST_PARTY_SOURCES_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)


@pytest.fixture(scope="session")
def address_candidates_path() -> Path:
    return Path(__file__).resolve().parent / "data" / "address_candidates.json"


@pytest.fixture
def address_candidates(address_candidates_path: Path) -> list[dict[str, Any]]:
    with address_candidates_path.open() as handle:
        return json.load(handle)
