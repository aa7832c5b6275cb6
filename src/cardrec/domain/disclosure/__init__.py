"""Consent-scoped disclosure: decide what an audience may see of a canonical card."""

from __future__ import annotations

from .filter import filter_card_for_audience
from .scopes import (
    coerce_role,
    coerce_scope,
    consent_allows,
    default_scope_for,
    field_policy_allows,
    is_expired,
    recipients_match,
    scope_allows,
)

__all__ = [
    "coerce_role",
    "coerce_scope",
    "consent_allows",
    "default_scope_for",
    "field_policy_allows",
    "filter_card_for_audience",
    "is_expired",
    "recipients_match",
    "scope_allows",
]
