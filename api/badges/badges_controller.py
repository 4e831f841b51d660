# badges_controller.py
from typing import List
from api.badges.badges_schema import BadgeTierRead
from api.badges.badges_service import list_tiers
from config.settings import settings


def list_all_badges() -> List[BadgeTierRead]:
    return list_tiers(settings.CHALLENGE_CYCLE_SIZE)
