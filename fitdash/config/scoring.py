"""
Scoring and Rewards Configuration
Calorie rates, point formulas, weekly goal options and the rewards catalogue.
Shared by the workouts, check-ins, profiles and rewards modules.
"""

from decimal import Decimal, ROUND_HALF_UP

# kcal burned per minute for each workout type
CALORIES_PER_MINUTE = {
    "weights": 5,
    "cardio": 10,
    "aerobics": 8,
    "hiit": 14,
    "spinning": 12,
    "other": 6,
}

WORKOUT_TYPE_LABELS = {
    "weights": "Weights",
    "cardio": "Cardio",
    "aerobics": "Aerobics",
    "hiit": "HIIT",
    "spinning": "Spinning",
    "other": "Other",
}

POINTS_PER_CALORIE = Decimal("0.1")

CHECK_IN_POINTS = 50
WEEKLY_GOAL_BONUS = 100
STREAK_WEEK_BONUS = 25

# Weekly visit goals a member can pick
GOAL_OPTIONS = {
    2: {"label": "2 visits", "description": "Perfect for beginners", "intensity": "Light"},
    3: {"label": "3 visits", "description": "Balanced & sustainable", "intensity": "Moderate"},
    4: {"label": "4 visits", "description": "For dedicated athletes", "intensity": "Intense"},
}

REWARDS = [
    {
        "id": "1",
        "name": "Free Protein Shake",
        "description": "Redeem for any protein shake at the juice bar",
        "points_cost": 500,
        "category": "Food & Drinks",
    },
    {
        "id": "2",
        "name": "Guest Pass",
        "description": "Bring a friend for a free workout session",
        "points_cost": 1000,
        "category": "Access",
    },
    {
        "id": "3",
        "name": "Personal Training Session",
        "description": "30-minute session with a certified trainer",
        "points_cost": 2000,
        "category": "Training",
    },
    {
        "id": "4",
        "name": "Gym Merchandise",
        "description": "Choose from t-shirts, bottles, or towels",
        "points_cost": 2500,
        "category": "Merchandise",
    },
    {
        "id": "5",
        "name": "One Month Free",
        "description": "Get your next month membership free",
        "points_cost": 5000,
        "category": "Membership",
    },
    {
        "id": "6",
        "name": "Premium Locker",
        "description": "Upgrade to a premium locker for 3 months",
        "points_cost": 3000,
        "category": "Perks",
    },
]


def calories_for(workout_type: str, duration_minutes: int) -> int:
    """Calories burned for a session of the given type and length"""
    return duration_minutes * CALORIES_PER_MINUTE[workout_type]


def points_for_calories(calories: int) -> int:
    """round(calories * 0.1), halves rounded up"""
    points = (Decimal(calories) * POINTS_PER_CALORIE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(points)


def get_reward(reward_id: str):
    for reward in REWARDS:
        if reward["id"] == reward_id:
            return reward
    return None


def get_earning_rules():
    """Point rules shown to members on the rewards screen"""
    return [
        {"points": CHECK_IN_POINTS, "description": f"{CHECK_IN_POINTS} points per gym visit"},
        {"points": WEEKLY_GOAL_BONUS, "description": f"{WEEKLY_GOAL_BONUS} bonus points for hitting weekly goal"},
        {"points": STREAK_WEEK_BONUS, "description": f"{STREAK_WEEK_BONUS} extra points for each week on a streak"},
    ]
