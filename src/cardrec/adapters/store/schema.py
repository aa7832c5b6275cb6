"""Pydantic models describing card rows handed over by the persistent store."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _numeric_or_none(value: object) -> object:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _none_to_empty_list(value: object) -> object:
    return [] if value is None else value


class StoreBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ProvenanceRow(StoreBaseModel):
    source_system: str
    imported_at: datetime
    source_uid: str | None = None
    import_kind: str | None = None
    raw_ref: str | None = None
    transformer_version: str | None = None
    # Kept as raw text; unknown tiers degrade to the weakest one in translation.
    precedence: str | None = None

    _normalize_optional = field_validator(
        "source_uid", "import_kind", "raw_ref", "transformer_version", "precedence", mode="before"
    )(_blank_to_none)


class AuditRow(StoreBaseModel):
    created_at: datetime
    updated_at: datetime | None = None
    version: int = 1


class QualityRow(StoreBaseModel):
    # Range checks happen in the merge engine; unparsable values become None.
    confidence: float | None = None
    normalized: bool = False

    _normalize_confidence = field_validator("confidence", mode="before")(_numeric_or_none)


class ConsentRow(StoreBaseModel):
    default_scope: str | None = None
    recipients: list[str] = Field(default_factory=list[str])
    expires_at: datetime | None = None

    _normalize_recipients = field_validator("recipients", mode="before")(_none_to_empty_list)


class FieldPolicyRow(StoreBaseModel):
    path: str
    scope: str | None = None
    recipients: list[str] = Field(default_factory=list[str])
    purpose: str | None = None
    expires_at: datetime | None = None

    _normalize_recipients = field_validator("recipients", mode="before")(_none_to_empty_list)


class CardRow(StoreBaseModel):
    card_id: str = Field(min_length=1)
    person_id: str = Field(min_length=1)
    owner_user_id: str | None = None
    card_type: str
    data: dict[str, Any] = Field(default_factory=dict[str, Any])
    provenance: ProvenanceRow
    audit: AuditRow
    quality: QualityRow | None = None
    consent: ConsentRow | None = None
    field_policies: list[FieldPolicyRow] = Field(
        default_factory=list["FieldPolicyRow"], alias="fieldPolicies"
    )

    _normalize_policies = field_validator("field_policies", mode="before")(_none_to_empty_list)


class AudienceRow(StoreBaseModel):
    viewer_id: str | None = None
    groups: list[str] = Field(default_factory=list[str])
    role: str | None = None
    as_of: datetime | None = None

    _normalize_groups = field_validator("groups", mode="before")(_none_to_empty_list)
