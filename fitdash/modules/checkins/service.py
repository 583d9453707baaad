import logging
from datetime import datetime, timedelta
from supabase import Client
from fitdash.config.scoring import CHECK_IN_POINTS, WEEKLY_GOAL_BONUS, STREAK_WEEK_BONUS
from fitdash.core.periods import utcnow, start_of_day, start_of_week, parse_timestamp, goal_streak
from fitdash.modules.checkins.schemas import CheckInResponse, CheckInResult, WeekCheckInsResponse
from fitdash.modules.profiles.service import ProfileService, STREAK_LOOKBACK_WEEKS
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def goal_bonus(visits: int, goal: Optional[int], previous_streak: int) -> int:
    """Bonus for the visit that reaches the weekly goal, growing with the streak"""
    if goal and visits == goal:
        return WEEKLY_GOAL_BONUS + STREAK_WEEK_BONUS * previous_streak
    return 0


class CheckInService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = ProfileService(supabase)

    def _history(self, user_id: str, since: datetime) -> List[dict]:
        result = self.supabase.table("check_ins")\
            .select("*")\
            .eq("user_id", user_id)\
            .gte("created_at", since.isoformat())\
            .order("created_at")\
            .execute()
        return result.data or []

    def check_in(self, user_id: str, now: Optional[datetime] = None) -> CheckInResult:
        """Record a gym visit (one per day) and award visit, goal and streak points"""
        now = now or utcnow()
        week_start = start_of_week(now)
        today = start_of_day(now)
        profile = self.profiles.get_profile(user_id)
        if not profile.gym_id:
            raise HTTPException(status_code=400, detail="Join a gym before checking in")

        try:
            history = self._history(user_id, week_start - timedelta(weeks=STREAK_LOOKBACK_WEEKS))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        timestamps = [parse_timestamp(c["created_at"]) for c in history]
        if any(ts >= today for ts in timestamps):
            raise HTTPException(status_code=409, detail="Already checked in today")

        visits = sum(1 for ts in timestamps if ts >= week_start) + 1
        goal = profile.weekly_goal
        previous_streak = goal_streak(timestamps, goal, week_start, include_current=False)
        bonus = goal_bonus(visits, goal, previous_streak)
        points = CHECK_IN_POINTS + bonus

        try:
            result = self.supabase.table("check_ins").insert({
                "user_id": user_id,
                "gym_id": profile.gym_id,
                "points_earned": points
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to check in")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        total = self.profiles.add_points(user_id, points)
        reached = bool(goal) and visits >= goal
        logger.info("User %s checked in (visit %s this week, +%s points)", user_id, visits, points)

        message = f"+{CHECK_IN_POINTS} points earned. Keep crushing it!"
        if bonus:
            message = f"Weekly goal hit! +{points} points earned."
        return CheckInResult(
            check_in=CheckInResponse(**result.data[0]),
            visit_points=CHECK_IN_POINTS,
            bonus_points=bonus,
            visits_this_week=visits,
            weekly_goal=goal,
            goal_reached=reached,
            streak=previous_streak + (1 if reached else 0),
            total_points=total,
            message=message
        )

    def get_week(self, user_id: str, now: Optional[datetime] = None) -> WeekCheckInsResponse:
        """This week's check-ins"""
        now = now or utcnow()
        week_start = start_of_week(now)
        profile = self.profiles.get_profile(user_id)
        try:
            rows = self._history(user_id, week_start)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        today = start_of_day(now)
        return WeekCheckInsResponse(
            week_start=week_start,
            visits=len(rows),
            weekly_goal=profile.weekly_goal,
            checked_in_today=any(parse_timestamp(r["created_at"]) >= today for r in rows),
            check_ins=[CheckInResponse(**r) for r in rows]
        )
