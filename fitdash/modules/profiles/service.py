import logging
from datetime import datetime, timedelta
from supabase import Client
from fitdash.core.periods import utcnow, start_of_day, start_of_week, parse_timestamp, goal_streak
from fitdash.database.pagination import fetch_all
from fitdash.modules.auth.service import resolve_landing_route, display_name
from fitdash.modules.profiles.schemas import ProfileUpdate, ProfileResponse, DashboardResponse
from typing import Any, Dict, List, Optional, Tuple
from fastapi import HTTPException

logger = logging.getLogger(__name__)

STREAK_LOOKBACK_WEEKS = 52


def weekly_progress(visits: int, goal: Optional[int]) -> Tuple[float, int, bool]:
    """(percent toward goal capped at 100, visits remaining, goal reached)"""
    if not goal:
        return 0.0, 0, False
    progress = min(visits / goal * 100, 100.0)
    return round(progress, 1), max(goal - visits, 0), visits >= goal


def rank_by_points(profiles: List[Dict[str, Any]], user_id: str) -> Optional[int]:
    """1-based position of user_id when ordered by total points (stable on ties)"""
    ordered = sorted(profiles, key=lambda p: p.get("total_points") or 0, reverse=True)
    for index, profile in enumerate(ordered):
        if profile.get("user_id") == user_id:
            return index + 1
    return None


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fetch_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile of a user"""
        try:
            profile = self._fetch_profile(user_id)
            if not profile:
                raise HTTPException(status_code=404, detail="Profile not found")
            return ProfileResponse(**profile)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        return self._update(user_id, {"name": profile_data.name} if profile_data.name else {})

    def set_weekly_goal(self, user_id: str, weekly_goal: int) -> ProfileResponse:
        logger.info("User %s set weekly goal to %s", user_id, weekly_goal)
        return self._update(user_id, {"weekly_goal": weekly_goal})

    def set_gym(self, user_id: str, gym_id: str) -> ProfileResponse:
        """Point the member's profile at gym_id and make sure they hold the member role"""
        try:
            gym_result = self.supabase.table("gyms")\
                .select("id, name")\
                .eq("id", gym_id)\
                .limit(1)\
                .execute()
            if not gym_result.data:
                raise HTTPException(status_code=404, detail="Gym not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        profile = self._update(user_id, {"gym_id": gym_id})
        self.ensure_role(user_id, "member")
        logger.info("User %s joined gym %s", user_id, gym_id)
        return profile

    def ensure_role(self, user_id: str, role: str) -> None:
        try:
            existing = self.supabase.table("user_roles")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("role", role)\
                .execute()
            if not existing.data:
                self.supabase.table("user_roles").insert({
                    "user_id": user_id,
                    "role": role
                }).execute()
        except Exception as e:
            logger.error(f"Error adding {role} role for {user_id}: {e}")

    def add_points(self, user_id: str, points: int) -> int:
        """Add points to the running total and return the new total"""
        profile = self.get_profile(user_id)
        new_total = max(profile.total_points + points, 0)
        self._update(user_id, {"total_points": new_total})
        return new_total

    def _update(self, user_id: str, update_data: Dict[str, Any]) -> ProfileResponse:
        try:
            if not update_data:
                return self.get_profile(user_id)
            update_data["updated_at"] = datetime.utcnow().isoformat()
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_dashboard(self, user_data: Dict[str, Any], roles: List[str], now: Optional[datetime] = None) -> DashboardResponse:
        """Home screen numbers: weekly progress, points, streak and gym rank"""
        user_id = user_data["id"]
        now = now or utcnow()
        week_start = start_of_week(now)
        today = start_of_day(now)
        try:
            profile = self._fetch_profile(user_id)
            if not profile:
                raise HTTPException(status_code=404, detail="Profile not found")

            lookback = week_start - timedelta(weeks=STREAK_LOOKBACK_WEEKS)
            check_ins = fetch_all(lambda: self.supabase.table("check_ins")\
                .select("created_at, points_earned")\
                .eq("user_id", user_id)\
                .gte("created_at", lookback.isoformat())\
                .order("created_at"))
            workouts = fetch_all(lambda: self.supabase.table("workouts")\
                .select("points_earned, created_at")\
                .eq("user_id", user_id)\
                .gte("created_at", week_start.isoformat())\
                .order("created_at"))

            gym_name = None
            gym_members: List[Dict[str, Any]] = []
            gym_id = profile.get("gym_id")
            if gym_id:
                gym_result = self.supabase.table("gyms")\
                    .select("name")\
                    .eq("id", gym_id)\
                    .limit(1)\
                    .execute()
                if gym_result.data:
                    gym_name = gym_result.data[0]["name"]
                gym_members = fetch_all(lambda: self.supabase.table("profiles")\
                    .select("user_id, total_points")\
                    .eq("gym_id", gym_id)\
                    .order("created_at")\
                    .order("user_id"))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        this_week = [c for c in check_ins if parse_timestamp(c["created_at"]) >= week_start]
        visits = len(this_week)
        goal = profile.get("weekly_goal")
        progress, remaining, reached = weekly_progress(visits, goal)
        points_this_week = sum(c.get("points_earned") or 0 for c in this_week)
        points_this_week += sum(w.get("points_earned") or 0 for w in workouts)

        return DashboardResponse(
            name=display_name(user_data, profile),
            gym_id=gym_id,
            gym_name=gym_name,
            weekly_goal=goal,
            visits_this_week=visits,
            visits_remaining=remaining,
            progress=progress,
            goal_reached=reached,
            total_points=profile.get("total_points") or 0,
            points_this_week=points_this_week,
            streak=goal_streak([c["created_at"] for c in check_ins], goal, week_start),
            rank=rank_by_points(gym_members, user_id) if gym_members else None,
            gym_member_count=len(gym_members),
            checked_in_today=any(parse_timestamp(c["created_at"]) >= today for c in this_week),
            redirect_to=resolve_landing_route(roles, profile)
        )
