from fastapi import APIRouter, Depends
from fitdash.config.scoring import GOAL_OPTIONS
from fitdash.core.dependencies import get_current_user_id, get_user_supabase, get_user_roles
from fitdash.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, WeeklyGoalUpdate, GymChange, GoalOption, DashboardResponse
)
from fitdash.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_user_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/goal-options", response_model=List[GoalOption])
async def list_goal_options(
    user_data: Dict = Depends(get_current_user_id)
):
    """Weekly visit goals a member can choose from"""
    return [GoalOption(value=value, **option) for value, option in GOAL_OPTIONS.items()]


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_profile(user_data["id"])


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(user_data["id"], profile_data)


@router.put("/me/goal", response_model=ProfileResponse)
async def set_weekly_goal(
    goal_data: WeeklyGoalUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Set how many gym visits per week the member aims for"""
    return service.set_weekly_goal(user_data["id"], goal_data.weekly_goal)


@router.put("/me/gym", response_model=ProfileResponse)
async def change_my_gym(
    gym_data: GymChange,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Switch the member to another gym"""
    return service.set_gym(user_data["id"], gym_data.gym_id)


@router.get("/me/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
    supabase: Client = Depends(get_user_supabase)
):
    """Weekly progress, points, streak and rank for the home screen"""
    roles = get_user_roles(user_data["id"], supabase)
    return service.get_dashboard(user_data, roles)
