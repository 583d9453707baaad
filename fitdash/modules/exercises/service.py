"""
Exercise suggestions from an OpenAI-compatible chat completions gateway.

The model is asked for a JSON object; when its reply cannot be parsed the
static fallback list for the workout type is returned instead.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

import requests

from fitdash.config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a fitness coach inside a gym app. Based on the workout type the user selected, generate a list of 4-6 relevant exercises. Keep the exercises simple, clear, and beginner-friendly unless otherwise specified.

IMPORTANT: You must respond ONLY with valid JSON, no other text. Use this exact format:
{
  "exercises": [
    { "name": "Exercise Name", "sets": 3, "reps": 10 },
    { "name": "Cardio Exercise", "duration_minutes": 15 }
  ]
}

Rules:
- For strength exercises (weights, HIIT): include "sets" and "reps"
- For cardio/timed exercises (cardio, aerobics, spinning): include "duration_minutes" instead
- Keep exercise names short and clear
- Suggest 4-6 exercises total"""

FALLBACK_EXERCISES: Dict[str, List[Dict[str, Any]]] = {
    "weights": [
        {"name": "Bench Press", "sets": 3, "reps": 10},
        {"name": "Squats", "sets": 3, "reps": 12},
        {"name": "Deadlift", "sets": 3, "reps": 8},
        {"name": "Shoulder Press", "sets": 3, "reps": 10},
    ],
    "cardio": [
        {"name": "Treadmill Jog", "duration_minutes": 15},
        {"name": "Stationary Bike", "duration_minutes": 10},
        {"name": "Rowing Machine", "duration_minutes": 10},
    ],
    "aerobics": [
        {"name": "Step Aerobics", "duration_minutes": 20},
        {"name": "Dance Cardio", "duration_minutes": 15},
    ],
    "hiit": [
        {"name": "Burpees", "sets": 4, "reps": 10},
        {"name": "Mountain Climbers", "sets": 4, "reps": 20},
        {"name": "Box Jumps", "sets": 4, "reps": 12},
    ],
    "spinning": [
        {"name": "Warm-up Ride", "duration_minutes": 5},
        {"name": "Hill Climb", "duration_minutes": 10},
        {"name": "Sprint Intervals", "duration_minutes": 10},
    ],
    "other": [
        {"name": "Stretching", "duration_minutes": 10},
        {"name": "Yoga Flow", "duration_minutes": 15},
    ],
}

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class SuggestionError(Exception):
    """Failure to report to the caller as {"error": message}"""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def get_fallback_exercises(workout_type: str) -> List[Dict[str, Any]]:
    return [dict(ex) for ex in FALLBACK_EXERCISES.get(workout_type, FALLBACK_EXERCISES["other"])]


def parse_exercises(content: Any, workout_type: str) -> List[Dict[str, Any]]:
    """Pull the exercise list out of the model's reply, tolerating text around the JSON"""
    if not isinstance(content, str):
        logger.error("AI response content is not text, using fallback for %s", workout_type)
        return get_fallback_exercises(workout_type)
    match = _JSON_OBJECT.search(content)
    if not match:
        logger.error("No JSON found in AI response, using fallback for %s", workout_type)
        return get_fallback_exercises(workout_type)
    try:
        parsed = json.loads(match.group(0))
    except ValueError as e:
        logger.error(f"Failed to parse AI response: {e}")
        return get_fallback_exercises(workout_type)
    if not isinstance(parsed, dict):
        return get_fallback_exercises(workout_type)
    exercises = parsed.get("exercises") or []
    if not isinstance(exercises, list):
        return get_fallback_exercises(workout_type)
    return exercises


def reply_content(data: Any) -> Optional[Any]:
    """choices[0].message.content of a chat completion, or None when the shape is off"""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")


class ExerciseSuggestionService:
    def __init__(
        self,
        api_key: Optional[str] = None,
        gateway_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[int] = None
    ):
        self.api_key = api_key if api_key is not None else settings.ai_gateway_api_key
        self.gateway_url = gateway_url or settings.ai_gateway_url
        self.model = model or settings.ai_model
        self.timeout = timeout or settings.ai_request_timeout

    def suggest(self, workout_type: str, experience_level: str = "beginner") -> List[Dict[str, Any]]:
        if not self.api_key:
            raise SuggestionError("AI_GATEWAY_API_KEY is not configured")

        logger.info(f"Generating exercises for workout type: {workout_type}, level: {experience_level}")
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"Generate exercises for a {experience_level} doing a {workout_type} workout."},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(self.gateway_url, headers=headers, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"AI gateway request failed: {e}")
            raise SuggestionError(f"AI gateway request failed: {str(e)}")

        if response.status_code == 429:
            raise SuggestionError("Rate limit exceeded. Please try again later.", 429)
        if response.status_code == 402:
            raise SuggestionError("AI credits exhausted. Please add credits to continue.", 402)
        if not response.ok:
            logger.error("AI gateway error: %s %s", response.status_code, response.text)
            raise SuggestionError(f"AI gateway error: {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            raise SuggestionError("Invalid JSON response from AI gateway")

        content = reply_content(data)
        logger.debug("AI response content: %s", content)
        return parse_exercises(content, workout_type)
