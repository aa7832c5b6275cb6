"""Card-type specific normalization, validation and completeness scoring.

Only the well-known card types (see ``CardType``) carry rules; any other
``card_type`` passes through untouched, validates on envelope fields only and
scores 0 for completeness.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Final

from cardrec.domain.model import CardType, Quality

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from cardrec.domain.model import CardData, CardRecord, FieldPath, JsonValue

LABEL_ALIASES: Final[Mapping[str, str]] = {
    "internet": "work",
    "pref": "primary",
    "cell": "mobile",
    "voice": "phone",
    "msg": "messaging",
}

COUNTRY_ALIASES: Final[Mapping[str, str]] = {
    "united states": "US",
    "usa": "US",
    "us": "US",
    "united kingdom": "GB",
    "uk": "GB",
    "canada": "CA",
    "mexico": "MX",
}

DEFAULT_FIELD_PATHS: Final[Mapping[str, tuple[FieldPath, ...]]] = {
    CardType.PERSONAL_IDENTITY: (
        "givenName",
        "familyName",
        "displayName",
        "middleNames",
        "nicknames",
        "honorificPrefix",
        "honorificSuffix",
        "dateOfBirth",
        "profilePhoto",
        "organization",
        "jobTitle",
    ),
    CardType.EMAIL: ("username", "domain", "fullAddress", "labels", "isPrimary"),
    CardType.PHONE: (
        "fullNumber",
        "countryCode",
        "areaCode",
        "exchange",
        "lineNumber",
        "labels",
        "isPrimary",
    ),
    CardType.ADDRESS: (
        "poBox",
        "extendedAddress",
        "streetAddress",
        "locality",
        "region",
        "postalCode",
        "country",
        "labels",
        "isPrimary",
    ),
}

_ADDRESS_STRING_FIELDS: Final = (
    "poBox",
    "extendedAddress",
    "streetAddress",
    "locality",
    "region",
    "postalCode",
    "country",
)
_EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_US_ZIP_PATTERN: Final = re.compile(r"^(\d{5})[\s-]?(\d{4})?$")
_DIGITS_PATTERN: Final = re.compile(r"^\d+$")
_NON_DIGITS: Final = re.compile(r"\D")


def field_paths_for(card_type: str) -> tuple[FieldPath, ...]:
    return DEFAULT_FIELD_PATHS.get(card_type, ())


# Normalization ----------------------------------------------------------------


def normalize_card(card: CardRecord) -> CardRecord:
    """Return a normalized copy of ``card`` flagged as ``quality.normalized``."""

    normalizer = _NORMALIZERS.get(card.card_type)
    data = normalizer(card.data) if normalizer is not None else None
    quality = replace(card.quality, normalized=True) if card.quality else Quality(normalized=True)
    if data is None:
        return card.evolve(quality=quality)
    return card.evolve(data=data, quality=quality)


def normalize_labels(labels: JsonValue) -> list[str]:
    values = labels if isinstance(labels, list) else [labels]
    normalized: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        label = value.strip().lower()
        if label:
            normalized.append(LABEL_ALIASES.get(label, label))
    return normalized


def normalize_country(country: str) -> str:
    return COUNTRY_ALIASES.get(country.strip().lower(), country.strip())


def _normalize_personal_identity(data: CardData) -> CardData:
    normalized: CardData = {}
    for key in ("givenName", "familyName", "displayName", "honorificPrefix", "honorificSuffix"):
        if _str(data.get(key)):
            normalized[key] = _str(data.get(key))
    for key in ("middleNames", "nicknames"):
        names = _string_list(data.get(key))
        if names:
            normalized[key] = names
    for key in ("dateOfBirth", "profilePhoto", "organization"):
        if data.get(key):
            normalized[key] = data[key]
    if _str(data.get("jobTitle")):
        normalized["jobTitle"] = _str(data.get("jobTitle"))
    return normalized


def _normalize_email(data: CardData) -> CardData:
    normalized: CardData = {}
    for key in ("username", "domain", "fullAddress"):
        value = _str(data.get(key))
        if value:
            normalized[key] = value.lower()
    _normalize_common(data, normalized)
    return normalized


def _normalize_phone(data: CardData) -> CardData:
    normalized: CardData = {}
    for key in ("countryCode", "areaCode", "exchange", "lineNumber"):
        value = data.get(key)
        if isinstance(value, str) and value:
            normalized[key] = _NON_DIGITS.sub("", value)
    if _str(data.get("fullNumber")):
        normalized["fullNumber"] = _str(data.get("fullNumber"))
    _normalize_common(data, normalized)
    return normalized


def _normalize_address(data: CardData) -> CardData:
    normalized: CardData = {}
    for key in _ADDRESS_STRING_FIELDS:
        value = _str(data.get(key))
        if value:
            normalized[key] = value

    postal_code = normalized.get("postalCode")
    if isinstance(postal_code, str):
        match = _US_ZIP_PATTERN.match(postal_code)
        if match:
            zip5, plus4 = match.groups()
            normalized["postalCode"] = f"{zip5}-{plus4}" if plus4 else zip5

    country = normalized.get("country")
    if isinstance(country, str):
        normalized["country"] = normalize_country(country)

    _normalize_common(data, normalized)
    return normalized


def _normalize_common(data: CardData, normalized: CardData) -> None:
    if data.get("labels"):
        normalized["labels"] = normalize_labels(data["labels"])
    if "isPrimary" in data:
        normalized["isPrimary"] = bool(data["isPrimary"])


_NORMALIZERS: Final[Mapping[str, Callable[[CardData], CardData]]] = {
    CardType.PERSONAL_IDENTITY: _normalize_personal_identity,
    CardType.EMAIL: _normalize_email,
    CardType.PHONE: _normalize_phone,
    CardType.ADDRESS: _normalize_address,
}


# Validation -------------------------------------------------------------------


@dataclass(slots=True)
class ValidationReport:
    errors: list[str] = field(default_factory=list[str])

    @property
    def valid(self) -> bool:
        return not self.errors


def validate_card(card: CardRecord) -> ValidationReport:
    """Check envelope fields and type-specific payload requirements."""

    report = ValidationReport()
    errors = report.errors
    if not card.card_id:
        errors.append("Missing card_id")
    if not card.person_id:
        errors.append("Missing person_id")
    if not card.card_type:
        errors.append("Missing card_type")
    if not card.provenance.source_system:
        errors.append("Missing provenance.source_system")

    data = card.data
    match card.card_type:
        case CardType.EMAIL:
            full_address = _str(data.get("fullAddress"))
            if not full_address:
                errors.append("Email card missing fullAddress")
            elif not _EMAIL_PATTERN.match(full_address):
                errors.append("Invalid email format")
            if not data.get("username"):
                errors.append("Email card missing username")
            if not data.get("domain"):
                errors.append("Email card missing domain")
        case CardType.PHONE:
            if not data.get("fullNumber"):
                errors.append("Phone card missing fullNumber")
            for key in ("countryCode", "areaCode", "exchange", "lineNumber"):
                value = data.get(key)
                if value and not (isinstance(value, str) and _DIGITS_PATTERN.match(value)):
                    errors.append(f"Invalid {key} format")
        case CardType.ADDRESS:
            components = ("streetAddress", "locality", "region", "postalCode", "country")
            if not any(data.get(key) for key in components):
                errors.append("Address card missing all address components")
        case CardType.PERSONAL_IDENTITY:
            if not any(data.get(key) for key in ("givenName", "familyName", "displayName")):
                errors.append("Personal identity card missing all name fields")
        case _:
            pass
    return report


# Completeness -----------------------------------------------------------------


def completeness_score(card: CardRecord) -> int:
    """Return a 0-100 score of how filled-in the payload is for its card type."""

    data = card.data
    match card.card_type:
        case CardType.PERSONAL_IDENTITY:
            fields = (
                "givenName",
                "familyName",
                "displayName",
                "dateOfBirth",
                "profilePhoto",
                "organization",
                "jobTitle",
            )
            return round(_share(data, fields) * 100)
        case CardType.EMAIL:
            return round(
                _share(data, ("username", "domain", "fullAddress")) * 80
                + _share(data, ("labels",)) * 20
            )
        case CardType.PHONE:
            optional = ("countryCode", "areaCode", "exchange", "lineNumber", "labels")
            return round(_share(data, ("fullNumber",)) * 70 + _share(data, optional) * 30)
        case CardType.ADDRESS:
            fields = ("streetAddress", "locality", "region", "postalCode", "country")
            return round(_share(data, fields) * 100)
        case _:
            return 0


def _share(data: CardData, keys: tuple[str, ...]) -> float:
    return sum(1 for key in keys if data.get(key)) / len(keys)


def _str(value: JsonValue) -> str:
    return value.strip() if isinstance(value, str) else ""


def _string_list(value: JsonValue) -> list[JsonValue]:
    values = value if isinstance(value, list) else [value]
    return [item.strip() for item in values if isinstance(item, str) and item.strip()]
