import logging
from supabase import Client
from fitdash.config.scoring import CALORIES_PER_MINUTE, WORKOUT_TYPE_LABELS, calories_for, points_for_calories
from fitdash.modules.profiles.service import ProfileService
from fitdash.modules.workouts.schemas import (
    ExerciseEntry, WorkoutCreate, WorkoutEstimate, WorkoutResponse, WorkoutLogResult, WorkoutTypeInfo
)
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def list_workout_types() -> List[WorkoutTypeInfo]:
    return [
        WorkoutTypeInfo(value=value, label=WORKOUT_TYPE_LABELS[value], calories_per_minute=rate)
        for value, rate in CALORIES_PER_MINUTE.items()
    ]


def estimate_workout(workout_type: str, total_duration_minutes: int) -> WorkoutEstimate:
    calories = calories_for(workout_type, total_duration_minutes)
    return WorkoutEstimate(
        workout_type=workout_type,
        total_duration_minutes=total_duration_minutes,
        calories_burned=calories,
        points_earned=points_for_calories(calories)
    )


def named_exercises(exercises: List[ExerciseEntry]) -> List[ExerciseEntry]:
    """Drop rows the member left without a name"""
    return [ex for ex in exercises if ex.name.strip()]


def session_duration(exercises: List[ExerciseEntry], total_duration_minutes: Optional[int]) -> int:
    if total_duration_minutes is not None:
        return total_duration_minutes
    return sum(ex.duration_minutes or 0 for ex in exercises)


class WorkoutService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = ProfileService(supabase)

    def log_workout(self, user_id: str, workout_data: WorkoutCreate) -> WorkoutLogResult:
        """Save a workout session and credit its points to the member"""
        exercises = named_exercises(workout_data.exercises)
        if not exercises:
            raise HTTPException(status_code=400, detail="Please add at least one exercise")

        duration = session_duration(exercises, workout_data.total_duration_minutes)
        estimate = estimate_workout(workout_data.workout_type, duration)
        profile = self.profiles.get_profile(user_id)

        try:
            result = self.supabase.table("workouts").insert({
                "user_id": user_id,
                "gym_id": profile.gym_id,
                "workout_type": workout_data.workout_type,
                "exercises": [
                    {**ex.model_dump(exclude_none=True), "name": ex.name.strip()} for ex in exercises
                ],
                "total_duration_minutes": duration,
                "calories_burned": estimate.calories_burned,
                "points_earned": estimate.points_earned
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to log workout")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        total = self.profiles.add_points(user_id, estimate.points_earned)
        logger.info(
            "User %s logged %s workout: %s min, %s kcal, %s points",
            user_id, workout_data.workout_type, duration, estimate.calories_burned, estimate.points_earned
        )
        return WorkoutLogResult(
            workout=WorkoutResponse(**result.data[0]),
            total_points=total,
            message=f"Workout logged! +{estimate.points_earned} points earned"
        )

    def list_workouts(self, user_id: str, limit: int = 20, offset: int = 0) -> List[WorkoutResponse]:
        """Most recent workouts first"""
        try:
            result = self.supabase.table("workouts")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [WorkoutResponse(**w) for w in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_workout(self, user_id: str, workout_id: str) -> WorkoutResponse:
        try:
            result = self.supabase.table("workouts")\
                .select("*")\
                .eq("id", workout_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Workout not found")
            return WorkoutResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
