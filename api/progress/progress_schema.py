from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional
from api.badges.badges_schema import BadgeRecord


class SessionState(str, Enum):
    idle          = "idle"
    fetching      = "fetching"
    resolved      = "resolved"
    unchanged     = "unchanged"
    tier_advanced = "tier_advanced"


class RefreshOutcome(str, Enum):
    unchanged            = "unchanged"
    tier_advanced        = "tier_advanced"
    stale                = "stale"                 # superseded by a newer refresh
    identity_unavailable = "identity_unavailable"


class ProgressView(BaseModel):
    resolved_count: int = Field(0, ge=0)
    completed_cycles: int = Field(0, ge=0)
    cycle_progress: int = Field(0, ge=0)
    cycle_goal: int = Field(..., ge=1)
    progress_ratio: float = Field(0.0, ge=0.0, le=1.0)
    badge: Optional[BadgeRecord] = None
    milestone_reached: bool = False
    outcome: RefreshOutcome


class CachedBadge(BaseModel):
    badge: Optional[BadgeRecord] = None
