"""Public domain model surface."""

from __future__ import annotations

from cardrec.domain.model.card import Audit, CardRecord, Provenance, Quality
from cardrec.domain.model.consent import AudienceContext, ConsentBlock, FieldPolicy
from cardrec.domain.model.enums import AudienceRole, CardType, Precedence, Scope
from cardrec.domain.model.primitives import (
    NEUTRAL_CONFIDENCE,
    CardData,
    FieldPath,
    JsonScalar,
    JsonValue,
    normalize_confidence,
)

__all__ = [  # noqa: RUF022
    # card
    "CardRecord",
    "Provenance",
    "Quality",
    "Audit",
    # consent
    "ConsentBlock",
    "FieldPolicy",
    "AudienceContext",
    # enums
    "AudienceRole",
    "CardType",
    "Precedence",
    "Scope",
    # primitives
    "CardData",
    "FieldPath",
    "JsonScalar",
    "JsonValue",
    "NEUTRAL_CONFIDENCE",
    "normalize_confidence",
]
