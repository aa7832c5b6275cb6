"""Scope evaluation for disclosure decisions.

Every decision is a pure boolean. Unknown scopes or roles deny, so malformed
consent data can never widen disclosure.
"""

from __future__ import annotations

from datetime import UTC
from typing import TYPE_CHECKING

from cardrec.domain.model import AudienceRole, Scope

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import datetime

    from cardrec.domain.model import AudienceContext, ConsentBlock, FieldPolicy


def coerce_scope(value: object) -> Scope:
    """Return ``value`` as a ``Scope``; anything unrecognised is ``PRIVATE``."""

    if isinstance(value, Scope):
        return value
    if isinstance(value, str):
        try:
            return Scope(value)
        except ValueError:
            return Scope.PRIVATE
    return Scope.PRIVATE


def coerce_role(value: object) -> AudienceRole | None:
    if isinstance(value, AudienceRole):
        return value
    if isinstance(value, str):
        try:
            return AudienceRole(value)
        except ValueError:
            return None
    return None


def recipients_match(recipients: Collection[str], audience: AudienceContext) -> bool:
    """Return whether the viewer or one of its groups is listed in ``recipients``."""

    if not recipients:
        return False
    if audience.viewer_id is not None and audience.viewer_id in recipients:
        return True
    return any(group in recipients for group in audience.groups)


def scope_allows(
    scope: object,
    audience: AudienceContext,
    recipients: Collection[str] = (),
) -> bool:
    role = coerce_role(audience.role)
    match coerce_scope(scope):
        case Scope.PUBLIC:
            return True
        case Scope.COMMUNITY:
            # Signed-in participants only; an unknown role counts as anonymous.
            return role is not None and role is not AudienceRole.PUBLIC
        case Scope.GROUP | Scope.ONE_TO_ONE:
            return recipients_match(recipients, audience)
        case Scope.AGENT:
            return role is AudienceRole.AGENT
        case Scope.PRIVATE:
            return False


def is_expired(expires_at: datetime | None, as_of: datetime | None) -> bool:
    """Return whether ``expires_at`` has passed at ``as_of``; never without ``as_of``."""

    if expires_at is None or as_of is None:
        return False
    return _as_utc(expires_at) <= _as_utc(as_of)


def default_scope_for(consent: ConsentBlock | None, *, as_of: datetime | None = None) -> Scope:
    """Resolve the record-wide scope; absent or expired consent is private."""

    if consent is None or is_expired(consent.expires_at, as_of):
        return Scope.PRIVATE
    return coerce_scope(consent.default_scope)


def consent_allows(consent: ConsentBlock | None, audience: AudienceContext) -> bool:
    scope = default_scope_for(consent, as_of=audience.as_of)
    recipients = consent.recipients if consent is not None else ()
    return scope_allows(scope, audience, recipients)


def field_policy_allows(policy: FieldPolicy, audience: AudienceContext) -> bool:
    if is_expired(policy.expires_at, audience.as_of):
        return False
    return scope_allows(policy.scope, audience, policy.recipients)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)
