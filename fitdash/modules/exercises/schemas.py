from pydantic import BaseModel, Field


class SuggestExercisesRequest(BaseModel):
    workout_type: str = Field(min_length=1, max_length=50)
    experience_level: str = Field(default="beginner", max_length=50)
