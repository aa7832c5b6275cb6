"""Persistent-store row adapter."""

from __future__ import annotations

from .schema import (
    AudienceRow,
    AuditRow,
    CardRow,
    ConsentRow,
    FieldPolicyRow,
    ProvenanceRow,
    QualityRow,
)
from .translator import (
    card_to_payload,
    merge_result_to_payload,
    parse_audience,
    parse_card,
    parse_cards,
    translate_audience,
    translate_card,
)

__all__ = [
    "AudienceRow",
    "AuditRow",
    "CardRow",
    "ConsentRow",
    "FieldPolicyRow",
    "ProvenanceRow",
    "QualityRow",
    "card_to_payload",
    "merge_result_to_payload",
    "parse_audience",
    "parse_card",
    "parse_cards",
    "translate_audience",
    "translate_card",
]
