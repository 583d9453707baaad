from fastapi import APIRouter, Depends, Query
from fitdash.modules.workouts.schemas import (
    WorkoutCreate, WorkoutEstimateRequest, WorkoutEstimate, WorkoutResponse, WorkoutLogResult, WorkoutTypeInfo
)
from fitdash.modules.workouts.service import WorkoutService, list_workout_types, estimate_workout
from fitdash.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/workouts", tags=["workouts"])


def get_workout_service(supabase: Client = Depends(get_user_supabase)) -> WorkoutService:
    return WorkoutService(supabase)


@router.get("/types", response_model=List[WorkoutTypeInfo])
async def get_workout_types(
    user_data: Dict = Depends(get_current_user_id)
):
    """Workout types and their calorie rates"""
    return list_workout_types()


@router.post("/estimate", response_model=WorkoutEstimate)
async def estimate(
    estimate_data: WorkoutEstimateRequest,
    user_data: Dict = Depends(get_current_user_id)
):
    """Calories and points a session would earn, without saving it"""
    return estimate_workout(estimate_data.workout_type, estimate_data.total_duration_minutes)


@router.post("", response_model=WorkoutLogResult, status_code=201)
async def log_workout(
    workout_data: WorkoutCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: WorkoutService = Depends(get_workout_service)
):
    """Log a workout session"""
    return service.log_workout(user_data["id"], workout_data)


@router.get("", response_model=List[WorkoutResponse])
async def list_workouts(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user_data: Dict = Depends(get_current_user_id),
    service: WorkoutService = Depends(get_workout_service)
):
    return service.list_workouts(user_data["id"], limit=limit, offset=offset)


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: WorkoutService = Depends(get_workout_service)
):
    return service.get_workout(user_data["id"], workout_id)
