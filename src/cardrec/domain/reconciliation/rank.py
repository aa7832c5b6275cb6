"""Pairwise ranking of candidate cards.

Criteria are evaluated in a fixed order and each tie falls through to the
next one:
1) confidence (missing or malformed counts as 0.5)
2) precedence (missing counts as ``third_party``)
3) recency (``audit.updated_at`` if present, else ``provenance.imported_at``)

A tie on all three is a ``Conflict``; there is no hidden tie-break.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from cardrec.domain.model import Precedence, normalize_confidence

from .contracts import Conflict, RankCriterion, Winner

if TYPE_CHECKING:
    from cardrec.domain.model import CardRecord

    from .contracts import Decision


def effective_confidence(card: CardRecord) -> float:
    return normalize_confidence(card.quality.confidence if card.quality else None)


def effective_precedence(card: CardRecord) -> Precedence:
    precedence = card.provenance.precedence
    if isinstance(precedence, Precedence):
        return precedence
    return Precedence.THIRD_PARTY


def effective_timestamp(card: CardRecord) -> datetime:
    """Return the recency instant as an aware UTC datetime.

    Naive timestamps are read as UTC so mixed inputs stay comparable.
    """

    moment = card.audit.updated_at or card.provenance.imported_at
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def choose_winner(a: CardRecord, b: CardRecord) -> Decision:
    """Rank two candidates; see the module docstring for the criteria."""

    confidence_a = effective_confidence(a)
    confidence_b = effective_confidence(b)
    if confidence_a != confidence_b:
        return Winner(
            record=a if confidence_a > confidence_b else b,
            criterion=RankCriterion.CONFIDENCE,
        )

    rank_a = effective_precedence(a).rank
    rank_b = effective_precedence(b).rank
    if rank_a != rank_b:
        return Winner(
            record=a if rank_a < rank_b else b,
            criterion=RankCriterion.PRECEDENCE,
        )

    moment_a = effective_timestamp(a)
    moment_b = effective_timestamp(b)
    if moment_a != moment_b:
        return Winner(
            record=a if moment_a > moment_b else b,
            criterion=RankCriterion.RECENCY,
        )

    return Conflict(candidates=(a, b))
