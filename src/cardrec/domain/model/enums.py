"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Precedence(StrEnum):
    """How much an assertion's source is trusted, strongest first."""

    SELF_ASSERTED = "self_asserted"
    INVITE_UPDATE = "invite_update"
    FIRST_PARTY = "first_party"
    THIRD_PARTY = "third_party"

    @property
    def rank(self) -> int:
        """Position in the fixed order; 0 is the strongest tier."""
        return _PRECEDENCE_ORDER.index(self)


_PRECEDENCE_ORDER: tuple[Precedence, ...] = (
    Precedence.SELF_ASSERTED,
    Precedence.INVITE_UPDATE,
    Precedence.FIRST_PARTY,
    Precedence.THIRD_PARTY,
)


class Scope(StrEnum):
    """Breadth of audience a value may be disclosed to."""

    PRIVATE = "private"
    ONE_TO_ONE = "one_to_one"
    GROUP = "group"
    COMMUNITY = "community"
    PUBLIC = "public"
    AGENT = "agent"


class AudienceRole(StrEnum):
    OWNER = "owner"
    INVITER = "inviter"
    PUBLIC = "public"
    AGENT = "agent"


class CardType(StrEnum):
    """Card types with dedicated normalization rules.

    ``CardRecord.card_type`` stays an open string; other types pass through.
    """

    PERSONAL_IDENTITY = "personal_identity"
    EMAIL = "email"
    PHONE = "phone"
    ADDRESS = "address"
