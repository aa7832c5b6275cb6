from __future__ import annotations

from datetime import UTC, datetime

from cardrec.adapters.store import (
    card_to_payload,
    merge_result_to_payload,
    parse_audience,
    parse_card,
)
from cardrec.domain.model import AudienceRole, FieldPolicy, Precedence, Scope
from cardrec.domain.reconciliation import merge_same_type
from tests.helpers.cards import card_row


def test_parse_card_builds_domain_record() -> None:
    card = parse_card(
        card_row(
            quality={"confidence": 0.8, "normalized": True},
            consent={"default_scope": "group", "recipients": ["group:family"]},
            fieldPolicies=[
                {"path": "data.fullAddress", "scope": "one_to_one", "recipients": ["user:x"]}
            ],
            provenance={
                "source_system": "google_contacts",
                "imported_at": "2025-03-01T12:00:00+00:00",
                "precedence": "First_Party",
            },
        )
    )

    assert card.card_type == "email"
    assert card.provenance.precedence is Precedence.FIRST_PARTY
    assert card.quality is not None
    assert card.quality.confidence == 0.8
    assert card.consent is not None
    assert card.consent.default_scope is Scope.GROUP
    assert card.consent.recipients == ("group:family",)
    assert card.field_policies == (
        FieldPolicy(path="data.fullAddress", scope=Scope.ONE_TO_ONE, recipients=("user:x",)),
    )


def test_unknown_scope_and_precedence_degrade_to_none() -> None:
    card = parse_card(
        card_row(
            consent={"default_scope": "everyone"},
            fieldPolicies=[{"path": "phone", "scope": "friends"}],
            provenance={
                "source_system": "crm",
                "imported_at": "2025-03-01T12:00:00Z",
                "precedence": "imported",
            },
        )
    )

    assert card.provenance.precedence is None
    assert card.consent is not None
    assert card.consent.default_scope is None
    assert card.field_policies[0].scope is None


def test_parse_audience_coerces_role_and_groups() -> None:
    audience = parse_audience(
        {
            "viewer_id": "user:abc",
            "groups": ["group:a", "group:a", "group:b"],
            "role": "agent",
            "as_of": "2025-03-02T00:00:00Z",
        }
    )

    assert audience.role is AudienceRole.AGENT
    assert audience.groups == frozenset({"group:a", "group:b"})
    assert audience.as_of == datetime(2025, 3, 2, tzinfo=UTC)


def test_parse_audience_with_unknown_role_has_no_role() -> None:
    assert parse_audience({"role": "admin"}).role is None


def test_card_payload_round_trips_through_parser() -> None:
    card = parse_card(
        card_row(
            quality={"confidence": 0.6},
            consent={"default_scope": "public", "expires_at": "2026-01-01T00:00:00Z"},
            fieldPolicies=[{"path": "username", "scope": "private", "purpose": "spam"}],
        )
    )

    payload = card_to_payload(card)

    assert payload["provenance"]["imported_at"] == "2025-03-01T12:00:00+00:00"
    assert payload["consent"]["default_scope"] == "public"
    assert payload["fieldPolicies"][0]["purpose"] == "spam"
    assert parse_card(payload) == card


def test_merge_result_payload_lists_card_ids() -> None:
    first = parse_card(card_row("first"))
    second = parse_card(card_row("second"))
    third = parse_card(card_row("third", quality={"confidence": 0.1}))

    payload = merge_result_to_payload(merge_same_type([first, second, third], []))

    assert payload["winner"]["card_id"] == "first"
    assert payload["losers"] == ["third"]
    assert payload["conflicts"] == [{"path": "*", "candidates": ["first", "second"]}]
