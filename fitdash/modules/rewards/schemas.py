from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class RewardResponse(BaseModel):
    id: str
    name: str
    description: str
    points_cost: int
    category: str
    can_afford: bool
    progress: float
    points_needed: int


class EarningRule(BaseModel):
    points: int
    description: str


class RewardCatalogResponse(BaseModel):
    points_balance: int
    rewards: List[RewardResponse]
    earning_rules: List[EarningRule]


class RedemptionResponse(BaseModel):
    id: str
    user_id: str
    gym_id: Optional[str] = None
    reward_id: str
    points_spent: int
    created_at: datetime

    class Config:
        from_attributes = True


class RedeemResult(BaseModel):
    redemption: RedemptionResponse
    reward_name: str
    points_balance: int
    message: str
