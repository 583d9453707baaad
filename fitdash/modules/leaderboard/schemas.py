from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class LeaderboardEntry(BaseModel):
    rank: int = 0
    user_id: str
    name: str
    points: int = 0
    visits: int = 0
    gym_name: Optional[str] = None
    is_current_user: bool = False


class LeaderboardResponse(BaseModel):
    scope: str
    period: str
    title: str
    since: datetime
    entries: List[LeaderboardEntry]
    current_user_entry: Optional[LeaderboardEntry] = None
