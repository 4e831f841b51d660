from typing import List, Optional, Sequence
from api.badges.badges_schema import BadgeResolution, BadgeTierRead
from config.badges_config import BadgeTier, BADGE_TIERS, DEFAULT_CYCLE_SIZE


def resolve(
    resolved_count: int,
    cycle_size: int = DEFAULT_CYCLE_SIZE,
    tiers: Sequence[BadgeTier] = BADGE_TIERS,
) -> BadgeResolution:
    """
    Map a cumulative resolved-report count to a badge tier and the progress
    made inside the current challenge cycle.

    Tier N unlocks at N * cycle_size; once every tier is unlocked the last one
    is kept. An exact multiple of cycle_size starts the next cycle at 0.
    """
    if resolved_count < 0:
        raise ValueError("resolved_count must be >= 0")
    if cycle_size < 1:
        raise ValueError("cycle_size must be >= 1")

    if resolved_count == 0:
        return BadgeResolution(cycle_size=cycle_size)

    completed_cycles = resolved_count // cycle_size
    tier_index: Optional[int] = None
    if completed_cycles >= 1 and tiers:
        tier_index = min(completed_cycles - 1, len(tiers) - 1)

    return BadgeResolution(
        current_tier=tiers[tier_index] if tier_index is not None else None,
        tier_index=tier_index,
        completed_cycles=completed_cycles,
        cycle_progress=resolved_count - completed_cycles * cycle_size,
        cycle_size=cycle_size,
    )


def list_tiers(
    cycle_size: int = DEFAULT_CYCLE_SIZE,
    tiers: Sequence[BadgeTier] = BADGE_TIERS,
) -> List[BadgeTierRead]:
    """The badge ladder with the resolved count each tier unlocks at."""
    return [
        BadgeTierRead(
            rank=tier.rank,
            name=tier.name,
            image_key=tier.image_key,
            unlocks_at=tier.rank * cycle_size,
        )
        for tier in tiers
    ]
