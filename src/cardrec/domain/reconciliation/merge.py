"""Fold same-type candidate cards into one canonical card.

Two granularities are supported:
- ``merge_same_type`` reports ties between whole candidates (path ``"*"``)
  and fills gaps in the winner from losers in collected order.
- ``merge_per_field`` reports ties only where tied candidates hold different
  values for a field path, and fills each path from its best-ranked holder.

A gap nested under a non-mapping value the winner holds is never filled.

Both are deterministic for a fixed input order and never mutate their inputs:
the returned winner is a copy of the selected candidate.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cardrec.domain.paths import can_set_path, get_path, set_path, strip_data_prefix

from .contracts import (
    WHOLE_RECORD_PATH,
    Conflict,
    EmptyInputError,
    MergeConflict,
    MergeMode,
    MergeResult,
    Winner,
)
from .rank import choose_winner

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from cardrec.domain.model import CardRecord, FieldPath

log = logging.getLogger(__name__)


@dataclass(slots=True)
class _FoldState:
    winner: CardRecord
    losers: list[CardRecord] = field(default_factory=list["CardRecord"])
    ties: list[Conflict] = field(default_factory=list["Conflict"])


def merge_same_type(
    candidates: Sequence[CardRecord],
    field_paths: Iterable[FieldPath] = (),
) -> MergeResult:
    """Select the canonical card among ``candidates`` and copy missing fields through.

    Raises ``EmptyInputError`` if ``candidates`` is empty. A full tie between
    the running winner and a challenger is recorded as a conflict and the
    running winner is kept; the challenger is then neither winner nor loser.
    """

    pool = _require_candidates(candidates)
    state = _fold(pool)

    canonical = state.winner.evolve()
    for path in _normalized_paths(field_paths):
        if get_path(canonical.data, path) is not None or not can_set_path(canonical.data, path):
            continue
        for loser in state.losers:
            value = get_path(loser.data, path)
            if value is not None:
                set_path(canonical.data, path, copy.deepcopy(value))
                break

    conflicts = tuple(
        MergeConflict(path=WHOLE_RECORD_PATH, candidates=tie.candidates) for tie in state.ties
    )
    _log_summary(canonical, pool, losers=len(state.losers), conflicts=len(conflicts))
    return MergeResult(winner=canonical, losers=tuple(state.losers), conflicts=conflicts)


def merge_per_field(
    candidates: Sequence[CardRecord],
    field_paths: Iterable[FieldPath] = (),
) -> MergeResult:
    """Select the canonical card, then rank every field path independently.

    Ranking uses record-level metadata for each field. Per path, only
    candidates holding a non-null value take part, the record winner first.
    A tie between holders of *different* values is a conflict on that path and
    keeps the running value. Record-level ties are not reported; tied
    challengers are listed after the losers.
    """

    pool = _require_candidates(candidates)
    state = _fold(pool)
    record_winner = state.winner

    canonical = record_winner.evolve()
    conflicts: list[MergeConflict] = []
    holders_order = [record_winner, *(card for card in pool if card is not record_winner)]
    for path in _normalized_paths(field_paths):
        holders = [card for card in holders_order if get_path(card.data, path) is not None]
        if not holders or not can_set_path(canonical.data, path):
            continue

        field_winner = holders[0]
        for challenger in holders[1:]:
            decision = choose_winner(field_winner, challenger)
            match decision:
                case Winner(record=record):
                    field_winner = record
                case Conflict(candidates=tied):
                    if get_path(field_winner.data, path) != get_path(challenger.data, path):
                        conflicts.append(MergeConflict(path=path, candidates=tied))

        if field_winner is not record_winner:
            value = get_path(field_winner.data, path)
            set_path(canonical.data, path, copy.deepcopy(value))

    losers = (*state.losers, *(tie.candidates[1] for tie in state.ties))
    _log_summary(canonical, pool, losers=len(losers), conflicts=len(conflicts))
    return MergeResult(winner=canonical, losers=losers, conflicts=tuple(conflicts))


def merge_cards(
    candidates: Sequence[CardRecord],
    field_paths: Iterable[FieldPath] = (),
    *,
    mode: MergeMode = MergeMode.WHOLE_RECORD,
) -> MergeResult:
    match mode:
        case MergeMode.WHOLE_RECORD:
            return merge_same_type(candidates, field_paths)
        case MergeMode.PER_FIELD:
            return merge_per_field(candidates, field_paths)
        case _:
            raise ValueError(f"Unsupported merge mode: {mode!r}")


def _require_candidates(candidates: Sequence[CardRecord]) -> tuple[CardRecord, ...]:
    pool = tuple(candidates)
    if not pool:
        raise EmptyInputError
    return pool


def _fold(pool: tuple[CardRecord, ...]) -> _FoldState:
    state = _FoldState(winner=pool[0])
    for challenger in pool[1:]:
        decision = choose_winner(state.winner, challenger)
        match decision:
            case Conflict():
                log.debug(
                    "Unresolved tie between cards %s and %s",
                    state.winner.card_id,
                    challenger.card_id,
                )
                state.ties.append(decision)
            case Winner(record=record, criterion=criterion) if record is challenger:
                log.debug(
                    "Card %s outranks %s by %s",
                    challenger.card_id,
                    state.winner.card_id,
                    criterion,
                )
                state.losers.append(state.winner)
                state.winner = challenger
            case Winner():
                state.losers.append(challenger)
    return state


def _normalized_paths(field_paths: Iterable[FieldPath]) -> list[FieldPath]:
    return [strip_data_prefix(path) for path in field_paths]


def _log_summary(
    canonical: CardRecord,
    pool: tuple[CardRecord, ...],
    *,
    losers: int,
    conflicts: int,
) -> None:
    if conflicts:
        log.info(
            "Merged %s %s candidates into %s with %s unresolved conflict(s)",
            len(pool),
            canonical.card_type,
            canonical.card_id,
            conflicts,
        )
    else:
        log.debug(
            "Merged %s %s candidates into %s (losers=%s)",
            len(pool),
            canonical.card_type,
            canonical.card_id,
            losers,
        )
