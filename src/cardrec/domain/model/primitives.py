"""Domain primitives: scalar aliases and confidence helpers."""

from __future__ import annotations

import math
from typing import Final

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]
type CardData = dict[str, JsonValue]
type FieldPath = str

NEUTRAL_CONFIDENCE: Final[float] = 0.5


def normalize_confidence(value: object) -> float:
    """Return ``value`` as a float in ``[0, 1]``.

    Missing, non-numeric and out-of-range values fall back to the neutral 0.5;
    in-range values are returned unchanged.
    """

    if value is None or isinstance(value, bool) or not isinstance(value, int | float):
        return NEUTRAL_CONFIDENCE
    number = float(value)
    if math.isnan(number) or number < 0.0 or number > 1.0:
        return NEUTRAL_CONFIDENCE
    return number
