from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from config.badges_config import BadgeTier


class BadgeRecord(BaseModel):
    """The single badge snapshot persisted in the local store."""
    id: int
    name: str
    image_key: str = Field(..., alias="imageKey")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_tier(cls, tier: BadgeTier) -> "BadgeRecord":
        return cls(id=tier.rank, name=tier.name, image_key=tier.image_key)


class BadgeTierRead(BaseModel):
    rank: int
    name: str
    image_key: str
    unlocks_at: int


class BadgeResolution(BaseModel):
    current_tier: Optional[BadgeTier] = None
    tier_index: Optional[int] = None        # 0-based position in the ladder
    completed_cycles: int = 0
    cycle_progress: int = 0
    cycle_size: int

    model_config = ConfigDict(frozen=True)

    @property
    def progress_ratio(self) -> float:
        return self.cycle_progress / self.cycle_size


class ReconcileResult(BaseModel):
    milestone_reached: bool = False
    tier_changed: bool = False
    badge: Optional[BadgeRecord] = None
    previous_badge: Optional[BadgeRecord] = None

    @property
    def advanced(self) -> bool:
        """True when the new badge ranks above the previously cached one"""
        new_rank = self.badge.id if self.badge else 0
        old_rank = self.previous_badge.id if self.previous_badge else 0
        return new_rank > old_rank
