import json
import logging
from typing import Optional

from pydantic import ValidationError

from api.badges.badges_schema import BadgeRecord, BadgeResolution, ReconcileResult
from config.badges_config import CURRENT_BADGE_KEY, COMPLETED_CHALLENGES_KEY
from utils.cache_utils import KeyValueStore, user_key

logger = logging.getLogger(__name__)


class BadgeCacheSync:
    """
    Keeps the last rendered badge in the local store and detects milestone
    crossings. The store is never a source of truth: every pass overwrites it
    from a freshly resolved count.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def cached_badge(self, user_id: str) -> Optional[BadgeRecord]:
        raw = self.store.get(user_key(CURRENT_BADGE_KEY, user_id))
        if not raw:
            return None
        try:
            return BadgeRecord.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning("Discarding unreadable cached badge for user %s: %s", user_id, e)
            return None

    def completed_challenges(self, user_id: str) -> int:
        raw = self.store.get(user_key(COMPLETED_CHALLENGES_KEY, user_id))
        if not raw:
            return 0
        try:
            return max(int(raw), 0)
        except ValueError:
            logger.warning("Discarding unreadable completed-challenge counter for user %s", user_id)
            return 0

    def clear(self, user_id: str) -> None:
        self.store.remove(user_key(CURRENT_BADGE_KEY, user_id))
        self.store.remove(user_key(COMPLETED_CHALLENGES_KEY, user_id))

    def _write_badge(self, user_id: str, badge: BadgeRecord) -> None:
        try:
            payload = json.dumps(badge.model_dump(by_alias=True))
        except (TypeError, ValueError) as e:
            logger.error("Could not serialize badge for user %s: %s", user_id, e)
            return
        self.store.set(user_key(CURRENT_BADGE_KEY, user_id), payload)

    def reconcile(
        self,
        user_id: str,
        resolved_count: int,
        resolution: BadgeResolution,
    ) -> ReconcileResult:
        previous = self.cached_badge(user_id)

        if resolved_count == 0:
            self.clear(user_id)
            return ReconcileResult(
                tier_changed=previous is not None,
                badge=None,
                previous_badge=previous,
            )

        badge = BadgeRecord.from_tier(resolution.current_tier) if resolution.current_tier else None
        previous_rank = previous.id if previous else 0
        new_rank = badge.id if badge else 0
        tier_changed = previous_rank != new_rank

        milestone = False
        if tier_changed:
            if badge:
                self._write_badge(user_id, badge)
            else:
                self.store.remove(user_key(CURRENT_BADGE_KEY, user_id))

            exact_crossing = resolved_count % resolution.cycle_size == 0
            milestone = exact_crossing and self.completed_challenges(user_id) < resolution.completed_cycles
            if milestone:
                logger.info(
                    "User %s reached milestone: %d completed challenge(s), badge %s",
                    user_id, resolution.completed_cycles, badge.name if badge else None,
                )

        self.store.set(
            user_key(COMPLETED_CHALLENGES_KEY, user_id),
            str(resolution.completed_cycles),
        )
        return ReconcileResult(
            milestone_reached=milestone,
            tier_changed=tier_changed,
            badge=badge,
            previous_badge=previous,
        )
