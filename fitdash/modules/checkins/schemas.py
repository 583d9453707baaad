from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class CheckInResponse(BaseModel):
    id: str
    user_id: str
    gym_id: Optional[str] = None
    points_earned: int
    created_at: datetime

    class Config:
        from_attributes = True


class CheckInResult(BaseModel):
    check_in: CheckInResponse
    visit_points: int
    bonus_points: int
    visits_this_week: int
    weekly_goal: Optional[int] = None
    goal_reached: bool
    streak: int
    total_points: int
    message: str


class WeekCheckInsResponse(BaseModel):
    week_start: datetime
    visits: int
    weekly_goal: Optional[int] = None
    checked_in_today: bool
    check_ins: List[CheckInResponse]
