"""Card envelope: identity, payload, provenance, quality and audit metadata."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from .consent import ConsentBlock, FieldPolicy
    from .enums import Precedence
    from .primitives import CardData


@dataclass(frozen=True, slots=True, kw_only=True)
class Provenance:
    """Where a candidate card came from.

    ``precedence`` is classified before merge begins (see
    ``cardrec.domain.reconciliation.precedence``); ``None`` ranks as the
    weakest tier.
    """

    source_system: str
    imported_at: datetime
    source_uid: str | None = None
    import_kind: str | None = None
    raw_ref: str | None = None
    transformer_version: str | None = None
    precedence: Precedence | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Quality:
    confidence: float | None = None
    normalized: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class Audit:
    """Timestamps and optimistic-concurrency version.

    The version is bumped by whichever collaborator persists a mutation; the
    engines only read it.
    """

    created_at: datetime
    updated_at: datetime | None = None
    version: int = 1


@dataclass(frozen=True, slots=True, kw_only=True)
class CardRecord:
    """One copy of a logical card.

    Records are frozen so ``card_id``/``person_id`` cannot change after
    creation. ``data`` is an open nested mapping and is immutable by
    convention only: derive new records with :meth:`evolve` instead of
    mutating it in place.
    """

    card_id: str
    person_id: str
    owner_user_id: str | None
    card_type: str
    data: CardData
    provenance: Provenance
    audit: Audit
    quality: Quality | None = None
    consent: ConsentBlock | None = None
    field_policies: tuple[FieldPolicy, ...] = field(default=())

    def evolve(self, **changes: object) -> CardRecord:
        """Return a copy with ``changes`` applied and an independent ``data`` tree."""

        if "data" not in changes:
            changes["data"] = copy.deepcopy(self.data)
        return replace(self, **changes)  # type: ignore[arg-type]
