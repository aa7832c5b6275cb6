"""Application entry points composing the adapters with the domain engines."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from cardrec.adapters.store import parse_audience, parse_card, parse_cards
from cardrec.config import get_engine_config
from cardrec.domain.disclosure import filter_card_for_audience
from cardrec.domain.normalization import field_paths_for, normalize_card, validate_card
from cardrec.domain.reconciliation import MergeMode, classify_candidates, merge_cards

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from cardrec.config import EngineConfig
    from cardrec.domain.model import CardRecord, FieldPath
    from cardrec.domain.normalization import ValidationReport
    from cardrec.domain.reconciliation import MergeResult

log = getLogger(__name__)


def reconcile_candidates(
    payloads: Iterable[Mapping[str, Any]],
    *,
    field_paths: Sequence[FieldPath] | None = None,
    mode: MergeMode = MergeMode.WHOLE_RECORD,
    normalize: bool = False,
    config: EngineConfig | None = None,
) -> MergeResult:
    """Parse candidate rows, classify their precedence and merge them.

    Without explicit ``field_paths`` the defaults for the first candidate's
    card type are used for copy-through.
    """

    effective_config = config or get_engine_config()
    candidates = parse_cards(payloads)
    if normalize:
        candidates = [normalize_card(card) for card in candidates]
    candidates = classify_candidates(
        candidates,
        first_party_sources=effective_config.first_party_sources,
    )
    paths = field_paths
    if paths is None:
        paths = field_paths_for(candidates[0].card_type) if candidates else ()

    log.info("Merging %s candidates (mode=%s, paths=%s)", len(candidates), mode, len(paths))
    result = merge_cards(candidates, paths, mode=mode)
    for conflict in result.conflicts:
        log.warning(
            "Unresolved conflict on %s between %s",
            conflict.path,
            ", ".join(candidate.card_id for candidate in conflict.candidates),
        )
    return result


def disclose_card(
    card_payload: Mapping[str, Any],
    audience_payload: Mapping[str, Any],
) -> CardRecord:
    card = parse_card(card_payload)
    audience = parse_audience(audience_payload)
    filtered = filter_card_for_audience(card, audience)
    log.info(
        "Disclosed card %s to viewer=%s role=%s",
        card.card_id,
        audience.viewer_id,
        audience.role,
    )
    return filtered


def validate_candidates(payloads: Iterable[Mapping[str, Any]]) -> dict[str, ValidationReport]:
    reports: dict[str, ValidationReport] = {}
    for payload in payloads:
        card = parse_card(payload)
        reports[card.card_id] = validate_card(card)
    return reports
