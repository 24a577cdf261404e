from __future__ import annotations

import logging

from ..items.models import Item, Match, MatchOut, MatchStatus, MessageCreate
from ..items.store import InMemoryStore

logger = logging.getLogger(__name__)

# Score given to a match the finder reported by hand against a lost listing.
REPORTED_MATCH_SCORE = 95


def link_found_report(store: InMemoryStore, lost_item: Item, found_item: Item) -> Match:
    """Record that *found_item* answers *lost_item* and notify the owner."""
    match = store.create_match(lost_item, found_item, REPORTED_MATCH_SCORE)
    store.send_message(
        found_item.user_id,
        MessageCreate(
            receiver_id=lost_item.user_id,
            item_id=lost_item.id,
            content=(
                f"Hi! I think I found your {lost_item.title}. I've reported it as a "
                "found item. Please check if this matches what you lost."
            ),
        ),
    )
    logger.info("Notified %s about found report %s", lost_item.user_id, found_item.id)
    return match


def matches_for_user(
    store: InMemoryStore, user_id: str, status: MatchStatus | None = None,
) -> list[MatchOut]:
    """Matches touching any of the user's items, with both items attached."""
    return [
        MatchOut(
            **m.model_dump(),
            lost_item=store.get_item(m.lost_item_id),
            found_item=store.get_item(m.found_item_id),
        )
        for m in store.get_matches(user_id, status)
    ]
