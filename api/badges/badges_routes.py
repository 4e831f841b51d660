# badges_routes.py
from fastapi import APIRouter
from typing import List
from api.badges.badges_controller import list_all_badges
from api.badges.badges_schema import BadgeTierRead

router = APIRouter(prefix="/achievements", tags=["Achievements"])


@router.get(
    "/badges",
    response_model=List[BadgeTierRead],
    summary="List the badge ladder and the resolved count each tier unlocks at"
)
def get_badges():
    return list_all_badges()
