"""
Time window helpers for weekly/monthly aggregates.
Weeks start Monday 00:00 UTC.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value) -> datetime:
    """Parse a Postgres timestamptz string (or datetime) into an aware UTC datetime"""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def start_of_day(moment: datetime) -> datetime:
    moment = parse_timestamp(moment)
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(moment: datetime) -> datetime:
    day = start_of_day(moment)
    return day - timedelta(days=day.weekday())


def start_of_month(moment: datetime) -> datetime:
    return start_of_day(moment).replace(day=1)


def period_start(period: str, moment: Optional[datetime] = None) -> datetime:
    """Start of the 'week' or 'month' containing moment"""
    moment = moment or utcnow()
    if period == "month":
        return start_of_month(moment)
    return start_of_week(moment)


def weekly_counts(timestamps: Iterable) -> Dict[datetime, int]:
    """Number of events per week, keyed by week start"""
    counts: Dict[datetime, int] = {}
    for ts in timestamps:
        week = start_of_week(parse_timestamp(ts))
        counts[week] = counts.get(week, 0) + 1
    return counts


def goal_streak(timestamps: Iterable, goal: Optional[int], current_week: datetime, include_current: bool = True) -> int:
    """Consecutive weeks, ending at current_week, on which the visit goal was met.

    Previous weeks only count while unbroken. The current week is added on top
    when include_current is set and its goal is already met; an unfinished
    current week never breaks the streak.
    """
    if not goal:
        return 0
    counts = weekly_counts(timestamps)
    current_week = start_of_week(current_week)
    streak = 0
    week = current_week - timedelta(weeks=1)
    while counts.get(week, 0) >= goal:
        streak += 1
        week -= timedelta(weeks=1)
    if include_current and counts.get(current_week, 0) >= goal:
        streak += 1
    return streak
