from __future__ import annotations

import pytest

from cardrec.domain.model import Precedence
from cardrec.domain.reconciliation import (
    classify_candidates,
    derive_precedence,
    with_derived_precedence,
)
from tests.helpers.cards import make_card


def test_explicit_precedence_is_kept() -> None:
    card = make_card(precedence=Precedence.INVITE_UPDATE, import_kind="manual")

    assert derive_precedence(card.provenance) is Precedence.INVITE_UPDATE


@pytest.mark.parametrize(
    ("import_kind", "expected"),
    [
        ("manual", Precedence.SELF_ASSERTED),
        (" Self ", Precedence.SELF_ASSERTED),
        ("invite", Precedence.INVITE_UPDATE),
        ("invite_update", Precedence.INVITE_UPDATE),
        ("vcf", Precedence.THIRD_PARTY),
        (None, Precedence.THIRD_PARTY),
    ],
)
def test_import_kind_decides_tier(import_kind: str | None, expected: Precedence) -> None:
    card = make_card(import_kind=import_kind)

    assert derive_precedence(card.provenance) is expected


def test_configured_source_system_is_first_party() -> None:
    card = make_card(source_system="Google_Contacts")

    assert (
        derive_precedence(card.provenance, first_party_sources={"google_contacts"})
        is Precedence.FIRST_PARTY
    )
    assert derive_precedence(card.provenance) is Precedence.THIRD_PARTY


def test_with_derived_precedence_returns_classified_copy() -> None:
    card = make_card(import_kind="manual", data={"name": "Alan"})

    classified = with_derived_precedence(card)

    assert classified.provenance.precedence is Precedence.SELF_ASSERTED
    assert card.provenance.precedence is None
    assert classified.data == card.data
    assert classified.data is not card.data


def test_already_classified_card_is_returned_as_is() -> None:
    card = make_card(precedence=Precedence.FIRST_PARTY)

    assert with_derived_precedence(card) is card


def test_classify_candidates_keeps_order() -> None:
    cards = [make_card("a", import_kind="invite"), make_card("b")]

    classified = classify_candidates(cards)

    assert [card.card_id for card in classified] == ["a", "b"]
    assert [card.provenance.precedence for card in classified] == [
        Precedence.INVITE_UPDATE,
        Precedence.THIRD_PARTY,
    ]
