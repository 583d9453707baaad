from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from fitdash.config.scoring import GOAL_OPTIONS


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)


class WeeklyGoalUpdate(BaseModel):
    weekly_goal: int

    @field_validator("weekly_goal")
    @classmethod
    def goal_must_be_an_option(cls, value: int) -> int:
        if value not in GOAL_OPTIONS:
            raise ValueError(f"Weekly goal must be one of {sorted(GOAL_OPTIONS)}")
        return value


class GymChange(BaseModel):
    gym_id: str


class GoalOption(BaseModel):
    value: int
    label: str
    description: str
    intensity: str


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    gym_id: Optional[str] = None
    name: str
    email: str
    total_points: int = 0
    weekly_goal: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DashboardResponse(BaseModel):
    name: str
    gym_id: Optional[str] = None
    gym_name: Optional[str] = None
    weekly_goal: Optional[int] = None
    visits_this_week: int
    visits_remaining: int
    progress: float
    goal_reached: bool
    total_points: int
    points_this_week: int
    streak: int
    rank: Optional[int] = None
    gym_member_count: int
    checked_in_today: bool
    redirect_to: str
