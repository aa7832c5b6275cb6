"""Classify candidate provenance into a precedence tier before merging."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Final

from cardrec.domain.model import Precedence

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from cardrec.domain.model import CardRecord, Provenance

SELF_ASSERTED_IMPORT_KINDS: Final[frozenset[str]] = frozenset(
    {"self", "manual", "user_input", "self_asserted"}
)
INVITE_IMPORT_KINDS: Final[frozenset[str]] = frozenset({"invite", "invitation", "invite_update"})


def derive_precedence(
    provenance: Provenance,
    *,
    first_party_sources: Collection[str] = (),
) -> Precedence:
    """Return the precedence tier for ``provenance``.

    An explicit precedence always wins. Otherwise the import kind decides
    between self-asserted and invite updates, then the source system decides
    between first and third party.
    """

    if isinstance(provenance.precedence, Precedence):
        return provenance.precedence

    import_kind = (provenance.import_kind or "").strip().lower()
    if import_kind in SELF_ASSERTED_IMPORT_KINDS:
        return Precedence.SELF_ASSERTED
    if import_kind in INVITE_IMPORT_KINDS:
        return Precedence.INVITE_UPDATE

    source_system = provenance.source_system.strip().lower()
    if source_system in {source.strip().lower() for source in first_party_sources}:
        return Precedence.FIRST_PARTY
    return Precedence.THIRD_PARTY


def with_derived_precedence(
    card: CardRecord,
    *,
    first_party_sources: Collection[str] = (),
) -> CardRecord:
    """Return ``card`` unchanged if classified, else a copy carrying the derived tier."""

    precedence = derive_precedence(card.provenance, first_party_sources=first_party_sources)
    if card.provenance.precedence is precedence:
        return card
    return card.evolve(provenance=replace(card.provenance, precedence=precedence))


def classify_candidates(
    candidates: Iterable[CardRecord],
    *,
    first_party_sources: Collection[str] = (),
) -> list[CardRecord]:
    return [
        with_derived_precedence(card, first_party_sources=first_party_sources)
        for card in candidates
    ]
