from __future__ import annotations

from datetime import timedelta

import pytest

from cardrec.domain.disclosure import (
    coerce_scope,
    consent_allows,
    default_scope_for,
    field_policy_allows,
    is_expired,
    scope_allows,
)
from cardrec.domain.model import AudienceContext, AudienceRole, ConsentBlock, FieldPolicy, Scope
from tests.helpers.cards import T1, T2

OWNER = AudienceContext(viewer_id="user:owner", role=AudienceRole.OWNER)
ANONYMOUS = AudienceContext(role=AudienceRole.PUBLIC)
AGENT = AudienceContext(viewer_id="agent:scheduler", role=AudienceRole.AGENT)
PARENT = AudienceContext(
    viewer_id="user:parent",
    groups=frozenset({"group:classParents2025"}),
    role=AudienceRole.INVITER,
)


@pytest.mark.parametrize("audience", [OWNER, ANONYMOUS, AGENT, PARENT, AudienceContext()])
def test_public_scope_always_allows(audience: AudienceContext) -> None:
    assert scope_allows(Scope.PUBLIC, audience)


@pytest.mark.parametrize("audience", [OWNER, ANONYMOUS, AGENT, PARENT, AudienceContext()])
def test_private_scope_never_allows(audience: AudienceContext) -> None:
    assert not scope_allows(Scope.PRIVATE, audience, ("user:owner", "user:parent"))


def test_community_scope_requires_signed_in_role() -> None:
    assert scope_allows(Scope.COMMUNITY, OWNER)
    assert scope_allows(Scope.COMMUNITY, PARENT)
    assert scope_allows(Scope.COMMUNITY, AGENT)
    assert not scope_allows(Scope.COMMUNITY, ANONYMOUS)
    assert not scope_allows(Scope.COMMUNITY, AudienceContext(viewer_id="user:x"))


@pytest.mark.parametrize("scope", [Scope.GROUP, Scope.ONE_TO_ONE])
def test_recipient_scopes_match_viewer_or_group(scope: Scope) -> None:
    assert scope_allows(scope, PARENT, ("user:parent",))
    assert scope_allows(scope, PARENT, ("group:classParents2025",))
    assert not scope_allows(scope, PARENT, ("group:other", "user:other"))
    assert not scope_allows(scope, PARENT, ())


def test_agent_scope_requires_agent_role() -> None:
    assert scope_allows(Scope.AGENT, AGENT)
    assert not scope_allows(Scope.AGENT, OWNER)
    assert not scope_allows(Scope.AGENT, AudienceContext(viewer_id="agent:scheduler"))


def test_unknown_scope_and_role_values_deny() -> None:
    assert coerce_scope("everyone") is Scope.PRIVATE
    assert coerce_scope(None) is Scope.PRIVATE
    assert coerce_scope("public") is Scope.PUBLIC
    assert not scope_allows("everyone", OWNER)
    assert not scope_allows(
        Scope.COMMUNITY,
        AudienceContext(role="superuser"),  # type: ignore[arg-type]
    )


def test_missing_consent_block_is_private() -> None:
    assert default_scope_for(None) is Scope.PRIVATE
    assert default_scope_for(ConsentBlock()) is Scope.PRIVATE
    assert not consent_allows(None, OWNER)


def test_consent_recipients_feed_group_scope() -> None:
    consent = ConsentBlock(default_scope=Scope.GROUP, recipients=("group:classParents2025",))

    assert consent_allows(consent, PARENT)
    assert not consent_allows(consent, OWNER)


def test_expiry_is_only_checked_with_reference_instant() -> None:
    assert not is_expired(T1, None)
    assert not is_expired(None, T2)
    assert is_expired(T1, T2)
    assert is_expired(T1, T1)
    assert not is_expired(T2, T1)


def test_expired_consent_falls_back_to_private() -> None:
    consent = ConsentBlock(default_scope=Scope.PUBLIC, expires_at=T1)

    assert default_scope_for(consent) is Scope.PUBLIC
    assert default_scope_for(consent, as_of=T1 - timedelta(seconds=1)) is Scope.PUBLIC
    assert default_scope_for(consent, as_of=T2) is Scope.PRIVATE


def test_expired_field_policy_denies() -> None:
    policy = FieldPolicy(path="phone", scope=Scope.PUBLIC, expires_at=T1)
    current = AudienceContext(role=AudienceRole.PUBLIC, as_of=T1 - timedelta(days=1))
    later = AudienceContext(role=AudienceRole.PUBLIC, as_of=T2)

    assert field_policy_allows(policy, current)
    assert not field_policy_allows(policy, later)
