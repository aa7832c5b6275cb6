from __future__ import annotations

import pytest

from cardrec.domain.model import Precedence
from cardrec.domain.reconciliation import EmptyInputError, MergeConflict, merge_per_field
from tests.helpers.cards import T1, T2, make_card


def test_per_field_merge_rejects_empty_candidate_set() -> None:
    with pytest.raises(EmptyInputError):
        merge_per_field([], ["name"])


def test_tie_with_identical_values_is_not_a_conflict() -> None:
    first = make_card("first", data={"name": "Alan", "email": "a@x.com"})
    second = make_card("second", data={"name": "Alan", "email": "a@x.com"})

    result = merge_per_field([first, second], ["name", "email"])

    assert result.winner.card_id == "first"
    assert result.conflicts == ()
    assert result.losers == (second,)


def test_tie_reports_only_the_differing_field() -> None:
    first = make_card("first", data={"name": "Alan", "email": "a@x.com"})
    second = make_card("second", data={"name": "Alan", "email": "alan@x.com"})

    result = merge_per_field([first, second], ["name", "email"])

    assert result.conflicts == (MergeConflict(path="email", candidates=(first, second)),)
    assert result.winner.data == {"name": "Alan", "email": "a@x.com"}


def test_gap_is_filled_from_best_ranked_holder() -> None:
    winner = make_card("winner", confidence=0.9, data={"name": "Alan"})
    low = make_card("low", confidence=0.2, data={"email": "low@x.com"})
    mid = make_card("mid", confidence=0.6, data={"email": "mid@x.com"})

    result = merge_per_field([winner, low, mid], ["name", "email"])

    assert result.winner.data == {"name": "Alan", "email": "mid@x.com"}
    assert result.conflicts == ()


def test_record_winner_value_is_kept_over_lower_ranked_holders() -> None:
    newer = make_card("newer", precedence=Precedence.FIRST_PARTY, updated_at=T2, data={"name": "N"})
    older = make_card("older", precedence=Precedence.FIRST_PARTY, updated_at=T1, data={"name": "O"})

    result = merge_per_field([older, newer], ["name"])

    assert result.winner.card_id == "newer"
    assert result.winner.data == {"name": "N"}
    assert result.losers == (older,)


def test_tied_gap_holders_with_different_values_conflict_on_that_path() -> None:
    winner = make_card("winner", confidence=0.9, data={"name": "Alan"})
    left = make_card("left", confidence=0.4, data={"phone": "555-0100"})
    right = make_card("right", confidence=0.4, data={"phone": "555-0199"})

    result = merge_per_field([winner, left, right], ["phone"])

    assert result.conflicts == (MergeConflict(path="phone", candidates=(left, right)),)
    assert result.winner.data == {"name": "Alan", "phone": "555-0100"}


def test_nested_gap_under_scalar_winner_value_is_not_filled() -> None:
    winner = make_card("winner", confidence=0.9, data={"organization": "Acme"})
    donor = make_card("donor", confidence=0.1, data={"organization": {"unit": "R&D"}})

    result = merge_per_field([winner, donor], ["organization.unit", "organization"])

    assert result.winner.data == {"organization": "Acme"}
    assert result.conflicts == ()


def test_per_field_merge_never_mutates_candidates() -> None:
    winner = make_card("winner", confidence=0.9, data={"name": "Alan"})
    donor = make_card("donor", confidence=0.1, data={"address": {"city": "Oslo"}})

    result = merge_per_field([winner, donor], ["address.city"])
    result.winner.data["address"]["city"] = "Bergen"  # type: ignore[index]

    assert winner.data == {"name": "Alan"}
    assert donor.data == {"address": {"city": "Oslo"}}
