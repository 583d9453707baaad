from fastapi import APIRouter, Depends
from fitdash.modules.rewards.schemas import RewardCatalogResponse, RedemptionResponse, RedeemResult
from fitdash.modules.rewards.service import RewardService
from fitdash.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/rewards", tags=["rewards"])


def get_reward_service(supabase: Client = Depends(get_user_supabase)) -> RewardService:
    return RewardService(supabase)


@router.get("", response_model=RewardCatalogResponse)
async def get_rewards(
    user_data: Dict = Depends(get_current_user_id),
    service: RewardService = Depends(get_reward_service)
):
    """Rewards with affordability for the current balance"""
    return service.get_catalog(user_data["id"])


@router.get("/redemptions", response_model=List[RedemptionResponse])
async def list_redemptions(
    user_data: Dict = Depends(get_current_user_id),
    service: RewardService = Depends(get_reward_service)
):
    return service.list_redemptions(user_data["id"])


@router.post("/{reward_id}/redeem", response_model=RedeemResult, status_code=201)
async def redeem_reward(
    reward_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: RewardService = Depends(get_reward_service)
):
    return service.redeem(user_data["id"], reward_id)
