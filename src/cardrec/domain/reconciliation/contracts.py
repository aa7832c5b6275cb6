"""Shared merge contract components.

This module intentionally holds only:
- the tagged pairwise decision (``Winner`` | ``Conflict``)
- merge result dataclasses and the merge error type
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from cardrec.domain.model import CardRecord, FieldPath

WHOLE_RECORD_PATH: Final[str] = "*"


class EmptyInputError(ValueError):
    """Raised when a merge is requested without any candidate cards."""

    def __init__(self) -> None:
        super().__init__("Cannot merge an empty set of candidate cards")


class RankCriterion(StrEnum):
    """Which ranking criterion separated two candidates."""

    CONFIDENCE = "confidence"
    PRECEDENCE = "precedence"
    RECENCY = "recency"


class MergeMode(StrEnum):
    """Granularity at which ties are reported as conflicts."""

    WHOLE_RECORD = "whole_record"
    PER_FIELD = "per_field"


@dataclass(frozen=True, slots=True, kw_only=True)
class Winner:
    """One candidate outranked the other on ``criterion``."""

    record: CardRecord
    criterion: RankCriterion


@dataclass(frozen=True, slots=True, kw_only=True)
class Conflict:
    """Candidates tied on confidence, precedence and recency."""

    candidates: tuple[CardRecord, ...]

    def __post_init__(self) -> None:
        if len(self.candidates) < 2:
            raise ValueError("Conflict must include at least two candidates")


type Decision = Winner | Conflict


@dataclass(frozen=True, slots=True, kw_only=True)
class MergeConflict:
    """Unresolved tie surfaced for manual review.

    ``path`` is ``"*"`` for whole-record conflicts and a field path in
    per-field mode. ``candidates[0]`` is the running winner at the time of
    the tie.
    """

    path: FieldPath
    candidates: tuple[CardRecord, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class MergeResult:
    """Canonical card plus everything discarded or left unresolved."""

    winner: CardRecord
    losers: tuple[CardRecord, ...] = ()
    conflicts: tuple[MergeConflict, ...] = ()

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)
