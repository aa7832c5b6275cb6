"""Merge engine for reconciling duplicate card candidates.

Flow:
1) classify each candidate's provenance into a precedence tier
2) rank candidates pairwise (confidence, precedence, recency)
3) fold into one canonical card, collecting losers and unresolved ties
4) copy gaps in the canonical card through from lower-ranked candidates
"""

from __future__ import annotations

from .contracts import (
    WHOLE_RECORD_PATH,
    Conflict,
    Decision,
    EmptyInputError,
    MergeConflict,
    MergeMode,
    MergeResult,
    RankCriterion,
    Winner,
)
from .merge import merge_cards, merge_per_field, merge_same_type
from .precedence import classify_candidates, derive_precedence, with_derived_precedence
from .rank import choose_winner

__all__ = [
    "WHOLE_RECORD_PATH",
    "Conflict",
    "Decision",
    "EmptyInputError",
    "MergeConflict",
    "MergeMode",
    "MergeResult",
    "RankCriterion",
    "Winner",
    "choose_winner",
    "classify_candidates",
    "derive_precedence",
    "merge_cards",
    "merge_per_field",
    "merge_same_type",
    "with_derived_precedence",
]
