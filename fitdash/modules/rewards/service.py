import logging
from supabase import Client
from fitdash.config.scoring import REWARDS, get_reward, get_earning_rules
from fitdash.modules.profiles.service import ProfileService
from fitdash.modules.rewards.schemas import (
    RewardResponse, EarningRule, RewardCatalogResponse, RedemptionResponse, RedeemResult
)
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def reward_status(reward: dict, points: int) -> RewardResponse:
    cost = reward["points_cost"]
    return RewardResponse(
        **reward,
        can_afford=points >= cost,
        progress=round(min(points / cost * 100, 100.0), 1),
        points_needed=max(cost - points, 0)
    )


class RewardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = ProfileService(supabase)

    def get_catalog(self, user_id: str) -> RewardCatalogResponse:
        points = self.profiles.get_profile(user_id).total_points
        return RewardCatalogResponse(
            points_balance=points,
            rewards=[reward_status(reward, points) for reward in REWARDS],
            earning_rules=[EarningRule(**rule) for rule in get_earning_rules()]
        )

    def redeem(self, user_id: str, reward_id: str) -> RedeemResult:
        """Spend points on a reward"""
        reward = get_reward(reward_id)
        if not reward:
            raise HTTPException(status_code=404, detail="Reward not found")

        profile = self.profiles.get_profile(user_id)
        cost = reward["points_cost"]
        if profile.total_points < cost:
            raise HTTPException(
                status_code=400,
                detail=f"Not enough points: {cost - profile.total_points} more needed"
            )

        try:
            result = self.supabase.table("reward_redemptions").insert({
                "user_id": user_id,
                "gym_id": profile.gym_id,
                "reward_id": reward_id,
                "points_spent": cost
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to redeem reward")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        balance = self.profiles.add_points(user_id, -cost)
        logger.info("User %s redeemed reward %s for %s points", user_id, reward_id, cost)
        return RedeemResult(
            redemption=RedemptionResponse(**result.data[0]),
            reward_name=reward["name"],
            points_balance=balance,
            message=f"{reward['name']} redeemed!"
        )

    def list_redemptions(self, user_id: str) -> List[RedemptionResponse]:
        try:
            result = self.supabase.table("reward_redemptions")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [RedemptionResponse(**r) for r in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
