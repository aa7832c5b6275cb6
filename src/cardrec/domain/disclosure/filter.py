"""Per-audience filtered views of canonical cards.

The record-wide consent gate always runs first and field policies run after
it, one at a time. A field policy can only remove data: it cannot restore a
field the record-wide gate already cleared, so a ``public`` field policy on a
``private`` card discloses nothing.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from cardrec.domain.paths import InvalidPathError, delete_path, strip_data_prefix

from .scopes import consent_allows, field_policy_allows

if TYPE_CHECKING:
    from cardrec.domain.model import AudienceContext, CardData, CardRecord

log = logging.getLogger(__name__)


def filter_card_for_audience(card: CardRecord, audience: AudienceContext) -> CardRecord:
    """Return an independent copy of ``card`` holding only what ``audience`` may see.

    ``card`` is never mutated. The function does not raise on malformed
    consent data; it denies instead.
    """

    clone = copy.deepcopy(card)
    data: CardData = clone.data
    if not consent_allows(clone.consent, audience):
        data = {}

    for policy in clone.field_policies:
        if field_policy_allows(policy, audience):
            continue
        try:
            delete_path(data, strip_data_prefix(policy.path))
        except InvalidPathError:
            log.warning(
                "Field policy with invalid path %r on card %s; withholding all data",
                policy.path,
                card.card_id,
            )
            data = {}

    return replace(clone, data=data)
