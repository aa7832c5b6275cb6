"""Translate store rows into domain cards and back into JSON-ready payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cardrec.domain.disclosure import coerce_role
from cardrec.domain.model import (
    AudienceContext,
    Audit,
    CardRecord,
    ConsentBlock,
    FieldPolicy,
    Precedence,
    Provenance,
    Quality,
    Scope,
)

from .schema import AudienceRow, CardRow

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from cardrec.domain.reconciliation import MergeResult

    from .schema import ConsentRow, FieldPolicyRow, ProvenanceRow


def parse_card(payload: Mapping[str, Any]) -> CardRecord:
    return translate_card(CardRow.model_validate(payload))


def parse_cards(payloads: Iterable[Mapping[str, Any]]) -> list[CardRecord]:
    return [parse_card(payload) for payload in payloads]


def parse_audience(payload: Mapping[str, Any]) -> AudienceContext:
    return translate_audience(AudienceRow.model_validate(payload))


def translate_card(row: CardRow) -> CardRecord:
    return CardRecord(
        card_id=row.card_id,
        person_id=row.person_id,
        owner_user_id=row.owner_user_id,
        card_type=row.card_type,
        data=row.data,
        provenance=_translate_provenance(row.provenance),
        audit=Audit(
            created_at=row.audit.created_at,
            updated_at=row.audit.updated_at,
            version=row.audit.version,
        ),
        quality=(
            Quality(confidence=row.quality.confidence, normalized=row.quality.normalized)
            if row.quality is not None
            else None
        ),
        consent=_translate_consent(row.consent) if row.consent is not None else None,
        field_policies=tuple(_translate_field_policy(policy) for policy in row.field_policies),
    )


def translate_audience(row: AudienceRow) -> AudienceContext:
    return AudienceContext(
        viewer_id=row.viewer_id,
        groups=frozenset(row.groups),
        role=coerce_role(row.role),
        as_of=row.as_of,
    )


def card_to_payload(card: CardRecord) -> dict[str, Any]:
    """Serialize ``card`` into the store's row shape with ISO-8601 timestamps."""

    provenance = card.provenance
    payload: dict[str, Any] = {
        "card_id": card.card_id,
        "person_id": card.person_id,
        "owner_user_id": card.owner_user_id,
        "card_type": card.card_type,
        "data": card.data,
        "provenance": {
            "source_system": provenance.source_system,
            "source_uid": provenance.source_uid,
            "import_kind": provenance.import_kind,
            "raw_ref": provenance.raw_ref,
            "imported_at": _isoformat(provenance.imported_at),
            "transformer_version": provenance.transformer_version,
            "precedence": str(provenance.precedence) if provenance.precedence else None,
        },
        "audit": {
            "created_at": _isoformat(card.audit.created_at),
            "updated_at": _isoformat(card.audit.updated_at),
            "version": card.audit.version,
        },
        "quality": None,
        "consent": None,
        "fieldPolicies": [
            {
                "path": policy.path,
                "scope": str(policy.scope) if policy.scope else None,
                "recipients": list(policy.recipients),
                "purpose": policy.purpose,
                "expires_at": _isoformat(policy.expires_at),
            }
            for policy in card.field_policies
        ],
    }
    if card.quality is not None:
        payload["quality"] = {
            "confidence": card.quality.confidence,
            "normalized": card.quality.normalized,
        }
    consent = card.consent
    if consent is not None:
        payload["consent"] = {
            "default_scope": str(consent.default_scope) if consent.default_scope else None,
            "recipients": list(consent.recipients),
            "expires_at": _isoformat(consent.expires_at),
        }
    return payload


def merge_result_to_payload(result: MergeResult) -> dict[str, Any]:
    return {
        "winner": card_to_payload(result.winner),
        "losers": [loser.card_id for loser in result.losers],
        "conflicts": [
            {
                "path": conflict.path,
                "candidates": [candidate.card_id for candidate in conflict.candidates],
            }
            for conflict in result.conflicts
        ],
    }


def _translate_provenance(row: ProvenanceRow) -> Provenance:
    return Provenance(
        source_system=row.source_system,
        imported_at=row.imported_at,
        source_uid=row.source_uid,
        import_kind=row.import_kind,
        raw_ref=row.raw_ref,
        transformer_version=row.transformer_version,
        precedence=_coerce_precedence(row.precedence),
    )


def _translate_consent(row: ConsentRow) -> ConsentBlock:
    return ConsentBlock(
        default_scope=_coerce_scope(row.default_scope),
        recipients=tuple(row.recipients),
        expires_at=row.expires_at,
    )


def _translate_field_policy(row: FieldPolicyRow) -> FieldPolicy:
    return FieldPolicy(
        path=row.path,
        scope=_coerce_scope(row.scope),
        recipients=tuple(row.recipients),
        purpose=row.purpose,
        expires_at=row.expires_at,
    )


def _coerce_precedence(value: str | None) -> Precedence | None:
    if value is None:
        return None
    try:
        return Precedence(value.strip().lower())
    except ValueError:
        return None


def _coerce_scope(value: str | None) -> Scope | None:
    """Map unknown scope text to ``None`` so the policy engine treats it as private."""

    if value is None:
        return None
    try:
        return Scope(value.strip().lower())
    except ValueError:
        return None


def _isoformat(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None
