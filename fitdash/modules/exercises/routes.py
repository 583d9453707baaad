from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from fitdash.config import settings
from fitdash.core.rate_limit import limiter
from fitdash.modules.exercises.schemas import SuggestExercisesRequest
from fitdash.modules.exercises.service import ExerciseSuggestionService, SuggestionError
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["exercises"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@router.options("/suggest-exercises")
async def suggest_exercises_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/suggest-exercises")
@limiter.limit(settings.ai_rate_limit)
async def suggest_exercises(request: Request, body: SuggestExercisesRequest):
    """AI exercise suggestions for a workout type; {"exercises": [...]} or {"error": ...}"""
    try:
        exercises = ExerciseSuggestionService().suggest(body.workout_type, body.experience_level)
    except SuggestionError as e:
        if e.status_code == 500:
            logger.error(f"Error in suggest-exercises: {e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message}, headers=CORS_HEADERS)
    return JSONResponse(content={"exercises": exercises}, headers=CORS_HEADERS)
