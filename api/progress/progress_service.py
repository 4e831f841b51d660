"""
Challenge progress refresh: tally -> resolve -> cache sync -> view.

One `ProgressSession` models one screen session. Overlapping refreshes for
the same user are ordered by a generation counter kept in the shared store;
only the pass holding the latest generation may write the badge cache or
raise a milestone.
"""
import logging
from typing import Optional, Sequence

from api.badges.badge_cache_service import BadgeCacheSync
from api.badges.badges_schema import BadgeRecord, BadgeResolution
from api.badges.badges_service import resolve
from api.progress.progress_schema import CachedBadge, ProgressView, RefreshOutcome, SessionState
from api.reports.reports_service import count_resolved_reports
from config.badges_config import BadgeTier, BADGE_TIERS, PROGRESS_GENERATION_KEY
from config.settings import settings
from helpers.backend_client import BackendClient
from helpers.token_helper import IdentityError, get_user_id
from utils.cache_utils import KeyValueStore, user_key

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    SessionState.idle:          {SessionState.fetching},
    SessionState.fetching:      {SessionState.resolved, SessionState.idle},
    SessionState.resolved:      {SessionState.unchanged, SessionState.tier_advanced, SessionState.idle},
    SessionState.unchanged:     {SessionState.idle},
    SessionState.tier_advanced: {SessionState.idle},
}


class ProgressSession:
    def __init__(
        self,
        client: BackendClient,
        store: KeyValueStore,
        cycle_size: Optional[int] = None,
        tiers: Sequence[BadgeTier] = BADGE_TIERS,
    ):
        self.client = client
        self.store = store
        self.cycle_size = cycle_size if cycle_size is not None else settings.CHALLENGE_CYCLE_SIZE
        if self.cycle_size < 1:
            raise ValueError(f"cycle_size must be at least 1, got {self.cycle_size}")
        self.tiers = tiers
        self.cache_sync = BadgeCacheSync(store)
        self.state = SessionState.idle
        self.resolved_count = 0

    def _transition(self, new_state: SessionState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal progress transition {self.state.value} -> {new_state.value}")
        logger.debug("progress session %s -> %s", self.state.value, new_state.value)
        self.state = new_state

    def _view(
        self,
        count: int,
        resolution: BadgeResolution,
        outcome: RefreshOutcome,
        badge: Optional[BadgeRecord] = None,
        milestone: bool = False,
    ) -> ProgressView:
        return ProgressView(
            resolved_count=count,
            completed_cycles=resolution.completed_cycles,
            cycle_progress=resolution.cycle_progress,
            cycle_goal=resolution.cycle_size,
            progress_ratio=resolution.progress_ratio,
            badge=badge,
            milestone_reached=milestone,
            outcome=outcome,
        )

    def _is_latest(self, user_id: str, generation: Optional[int]) -> bool:
        if generation is None:
            # store unavailable: nothing to order against
            return True
        current = self.store.get(user_key(PROGRESS_GENERATION_KEY, user_id))
        return current is None or current == str(generation)

    def cached(self, token: Optional[str]) -> CachedBadge:
        """Last persisted badge, for rendering before the refresh completes."""
        try:
            user_id = get_user_id(token)
        except IdentityError as e:
            logger.info("No cached badge without identity: %s", e)
            return CachedBadge()
        return CachedBadge(badge=self.cache_sync.cached_badge(user_id))

    def refresh(self, token: Optional[str]) -> ProgressView:
        try:
            user_id = get_user_id(token)
        except IdentityError as e:
            logger.warning("Progress refresh skipped: %s", e)
            resolution = resolve(self.resolved_count, self.cycle_size, self.tiers)
            badge = BadgeRecord.from_tier(resolution.current_tier) if resolution.current_tier else None
            return self._view(self.resolved_count, resolution, RefreshOutcome.identity_unavailable, badge)

        generation = self.store.incr(user_key(PROGRESS_GENERATION_KEY, user_id))
        self._transition(SessionState.fetching)
        try:
            count = count_resolved_reports(self.client, token, user_id)
            resolution = resolve(count, self.cycle_size, self.tiers)
            self._transition(SessionState.resolved)

            if not self._is_latest(user_id, generation):
                logger.info("Discarding stale progress pass %s for user %s", generation, user_id)
                badge = BadgeRecord.from_tier(resolution.current_tier) if resolution.current_tier else None
                return self._view(count, resolution, RefreshOutcome.stale, badge)

            self.resolved_count = count
            result = self.cache_sync.reconcile(user_id, count, resolution)
            if result.advanced:
                self._transition(SessionState.tier_advanced)
                outcome = RefreshOutcome.tier_advanced
            else:
                self._transition(SessionState.unchanged)
                outcome = RefreshOutcome.unchanged
            return self._view(count, resolution, outcome, result.badge, result.milestone_reached)
        finally:
            self.state = SessionState.idle
