"""Consent metadata attached to canonical cards and the audience it is checked against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from .enums import AudienceRole, Scope


@dataclass(frozen=True, slots=True, kw_only=True)
class ConsentBlock:
    """Record-wide disclosure default. A missing ``default_scope`` means private."""

    default_scope: Scope | None = None
    recipients: tuple[str, ...] = ()
    expires_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldPolicy:
    """Path-specific override layered on top of the consent block.

    Paths are dot-delimited and may carry a leading ``data.`` segment,
    e.g. ``data.dateOfBirth.year``.
    """

    path: str
    scope: Scope | None = None
    recipients: tuple[str, ...] = ()
    purpose: str | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AudienceContext:
    """Who is asking, as resolved by the caller's auth layer.

    ``as_of`` enables expiry checks on consent blocks and field policies; the
    policy engine never reads the wall clock itself.
    """

    viewer_id: str | None = None
    groups: frozenset[str] = field(default_factory=frozenset[str])
    role: AudienceRole | None = None
    as_of: datetime | None = None
