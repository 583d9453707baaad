from fastapi import APIRouter, Depends
from fitdash.database.supabase_client import get_service_supabase
from fitdash.modules.leaderboard.schemas import LeaderboardResponse
from fitdash.modules.leaderboard.service import LeaderboardService
from fitdash.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import Dict, Literal

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


def get_leaderboard_service(
    supabase: Client = Depends(get_user_supabase),
    service_supabase: Client = Depends(get_service_supabase)
) -> LeaderboardService:
    return LeaderboardService(supabase, service_supabase)


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    scope: Literal["gym", "all"] = "gym",
    period: Literal["week", "month"] = "week",
    user_data: Dict = Depends(get_current_user_id),
    service: LeaderboardService = Depends(get_leaderboard_service)
):
    """Members ranked by points earned this week or month, in the user's gym or across all gyms"""
    return service.get_leaderboard(user_data["id"], scope=scope, period=period)
