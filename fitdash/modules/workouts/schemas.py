import json
from pydantic import AfterValidator, BaseModel, Field, field_validator
from typing import Annotated, Any, List, Optional
from datetime import datetime

from fitdash.config.scoring import CALORIES_PER_MINUTE


def _known_workout_type(value: str) -> str:
    if value not in CALORIES_PER_MINUTE:
        raise ValueError(f"Unknown workout type '{value}'")
    return value


WorkoutType = Annotated[str, AfterValidator(_known_workout_type)]


class ExerciseEntry(BaseModel):
    name: str = ""
    sets: Optional[int] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    is_ai_suggested: bool = False


class WorkoutCreate(BaseModel):
    workout_type: WorkoutType
    exercises: List[ExerciseEntry] = []
    total_duration_minutes: Optional[int] = Field(default=None, ge=0, le=24 * 60)


class WorkoutEstimateRequest(BaseModel):
    workout_type: WorkoutType
    total_duration_minutes: int = Field(ge=0, le=24 * 60)


class WorkoutEstimate(BaseModel):
    workout_type: str
    total_duration_minutes: int
    calories_burned: int
    points_earned: int


class WorkoutTypeInfo(BaseModel):
    value: str
    label: str
    calories_per_minute: int


class WorkoutResponse(BaseModel):
    id: str
    user_id: str
    gym_id: Optional[str] = None
    workout_type: str
    exercises: List[Any] = []
    total_duration_minutes: int
    calories_burned: int
    points_earned: int
    created_at: datetime

    @field_validator("exercises", mode="before")
    @classmethod
    def decode_exercises(cls, value):
        if isinstance(value, str):
            return json.loads(value or "[]")
        return value or []

    class Config:
        from_attributes = True


class WorkoutLogResult(BaseModel):
    workout: WorkoutResponse
    total_points: int
    message: str
