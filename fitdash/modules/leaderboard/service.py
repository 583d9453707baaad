import logging
from datetime import datetime
from supabase import Client
from fitdash.core.periods import period_start
from fitdash.database.pagination import fetch_all, chunked
from fitdash.modules.leaderboard.schemas import LeaderboardEntry, LeaderboardResponse
from typing import Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def rank_entries(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Sort by points (highest first) and number the ranks.

    The sort is stable: members tied on points keep the order they were
    fetched in and still get distinct consecutive ranks.
    """
    ranked = sorted(entries, key=lambda e: e.points, reverse=True)
    for index, entry in enumerate(ranked):
        entry.rank = index + 1
    return ranked


def tally(rows: List[dict]) -> Dict[str, Dict[str, int]]:
    """Per-user points and row counts"""
    totals: Dict[str, Dict[str, int]] = {}
    for row in rows:
        bucket = totals.setdefault(row["user_id"], {"points": 0, "count": 0})
        bucket["points"] += row.get("points_earned") or 0
        bucket["count"] += 1
    return totals


def gym_label(gym_id: Optional[str], gym_names: Dict[str, str]) -> str:
    if not gym_id:
        return "No Gym"
    return gym_names.get(gym_id, "Unknown Gym")


class LeaderboardService:
    def __init__(self, supabase: Client, service_supabase: Client):
        # Profiles and gyms are readable through RLS; other members' check-ins
        # and workouts are not, so period totals are read with the service client.
        self.supabase = supabase
        self.service_supabase = service_supabase

    def _period_rows(self, table: str, since: datetime, user_ids: Optional[List[str]]) -> List[dict]:
        """user_id and points_earned of rows created since the period start.

        user_ids None reads every member's rows (the all gyms board).
        """
        def query(ids: Optional[List[str]]):
            builder = self.service_supabase.table(table)\
                .select("id, user_id, points_earned")\
                .gte("created_at", since.isoformat())
            if ids is not None:
                builder = builder.in_("user_id", ids)
            return builder.order("id")

        if user_ids is None:
            return fetch_all(lambda: query(None))
        rows: List[dict] = []
        for ids in chunked(user_ids):
            rows.extend(fetch_all(lambda: query(ids)))
        return rows

    def get_leaderboard(self, user_id: str, scope: str = "gym", period: str = "week", now: Optional[datetime] = None) -> LeaderboardResponse:
        since = period_start(period, now)
        try:
            profile_result = self.supabase.table("profiles")\
                .select("gym_id")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            gym_id = profile_result.data[0].get("gym_id") if profile_result.data else None

            if scope == "gym":
                if not gym_id:
                    return LeaderboardResponse(scope=scope, period=period, title="No gym", since=since, entries=[])
                members = fetch_all(lambda: self.supabase.table("profiles")\
                    .select("user_id, name, gym_id")\
                    .eq("gym_id", gym_id)\
                    .order("created_at")\
                    .order("user_id"))
            else:
                members = fetch_all(lambda: self.supabase.table("profiles")\
                    .select("user_id, name, gym_id")\
                    .order("created_at")\
                    .order("user_id"))

            gym_ids = list({m["gym_id"] for m in members if m.get("gym_id")})
            if scope == "gym" and gym_id not in gym_ids:
                gym_ids.append(gym_id)
            gym_names = {}
            for ids in chunked(gym_ids):
                gyms = self.supabase.table("gyms")\
                    .select("id, name")\
                    .in_("id", ids)\
                    .execute().data or []
                gym_names.update({g["id"]: g["name"] for g in gyms})

            user_ids = None if scope == "all" else [m["user_id"] for m in members]
            check_ins: List[dict] = []
            workouts: List[dict] = []
            if members:
                check_ins = self._period_rows("check_ins", since, user_ids)
                workouts = self._period_rows("workouts", since, user_ids)
        except Exception as e:
            logger.error(f"Error building leaderboard: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        visit_totals = tally(check_ins)
        workout_totals = tally(workouts)
        entries = [
            LeaderboardEntry(
                user_id=m["user_id"],
                name=m.get("name") or "Unknown",
                points=visit_totals.get(m["user_id"], {}).get("points", 0)
                + workout_totals.get(m["user_id"], {}).get("points", 0),
                visits=visit_totals.get(m["user_id"], {}).get("count", 0),
                gym_name=gym_label(m.get("gym_id"), gym_names),
                is_current_user=m["user_id"] == user_id
            )
            for m in members
        ]
        ranked = rank_entries(entries)
        title = gym_names.get(gym_id, "My Gym") if scope == "gym" else "All Gyms"
        return LeaderboardResponse(
            scope=scope,
            period=period,
            title=title,
            since=since,
            entries=ranked,
            current_user_entry=next((e for e in ranked if e.is_current_user), None)
        )
