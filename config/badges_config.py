# config/badges_config.py

from enum import Enum
from typing import List, NamedTuple


class ReportStatus(str, Enum):
    pending              = "Pending"
    pending_confirmation = "Pending Confirmation"
    on_going             = "On Going"
    resolved             = "Resolved"           # only status that counts toward badges


class BadgeTier(NamedTuple):
    rank: int          # 1-based, tier N unlocks at N * cycle size resolved reports
    name: str
    image_key: str


# Finalized badge ladder
BADGE_TIERS: List[BadgeTier] = [
    BadgeTier(1, "Eco Starter",      "badge_eco_starter"),       # 10 resolved
    BadgeTier(2, "Green Guardian",   "badge_green_guardian"),    # 20 resolved
    BadgeTier(3, "Waste Warrior",    "badge_waste_warrior"),     # 30 resolved
    BadgeTier(4, "Planet Protector", "badge_planet_protector"),  # 40+ resolved
]

# Resolved reports per challenge cycle
DEFAULT_CYCLE_SIZE = 10

# Local store keys (suffixed with ":<user_id>")
CURRENT_BADGE_KEY        = "currentBadge"
COMPLETED_CHALLENGES_KEY = "completedChallenges"
PROGRESS_GENERATION_KEY  = "progressGeneration"
TOKEN_KEY                = "token"
