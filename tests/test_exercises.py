import pytest
import requests

from fitdash.config import settings
from fitdash.modules.exercises import service as exercise_service
from fitdash.modules.exercises.service import parse_exercises, get_fallback_exercises

URL = "/api/v1/suggest-exercises"


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _reply(content):
    return FakeResponse(200, {"choices": [{"message": {"content": content}}]})


@pytest.fixture
def gateway(monkeypatch):
    """Replace the HTTP call to the AI gateway; set .response to control it"""
    monkeypatch.setattr(settings, "ai_gateway_api_key", "test-key")
    calls = []

    class Gateway:
        response = _reply('{"exercises": []}')

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if isinstance(Gateway.response, Exception):
            raise Gateway.response
        return Gateway.response

    monkeypatch.setattr(exercise_service.requests, "post", fake_post)
    Gateway.calls = calls
    return Gateway


def test_suggestions_from_model(client, gateway):
    gateway.response = _reply(
        'Sure! {"exercises": [{"name": "Goblet Squat", "sets": 3, "reps": 12}, '
        '{"name": "Farmer Carry", "duration_minutes": 5}]} Have fun.'
    )
    response = client.post(URL, json={"workout_type": "weights", "experience_level": "intermediate"})
    assert response.status_code == 200
    assert response.json() == {"exercises": [
        {"name": "Goblet Squat", "sets": 3, "reps": 12},
        {"name": "Farmer Carry", "duration_minutes": 5}
    ]}
    assert response.headers["Access-Control-Allow-Origin"] == "*"

    sent = gateway.calls[0]
    assert sent["headers"]["Authorization"] == "Bearer test-key"
    assert sent["json"]["model"] == settings.ai_model
    assert "intermediate doing a weights workout" in sent["json"]["messages"][1]["content"]


def test_gateway_rate_limited(client, gateway):
    gateway.response = FakeResponse(429)
    response = client.post(URL, json={"workout_type": "cardio"})
    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded. Please try again later."}


def test_gateway_out_of_credits(client, gateway):
    gateway.response = FakeResponse(402)
    response = client.post(URL, json={"workout_type": "cardio"})
    assert response.status_code == 402
    assert response.json() == {"error": "AI credits exhausted. Please add credits to continue."}


def test_gateway_error(client, gateway):
    gateway.response = FakeResponse(503, text="upstream down")
    response = client.post(URL, json={"workout_type": "cardio"})
    assert response.status_code == 500
    assert response.json() == {"error": "AI gateway error: 503"}


def test_gateway_unreachable(client, gateway):
    gateway.response = requests.exceptions.ConnectionError("connection refused")
    response = client.post(URL, json={"workout_type": "cardio"})
    assert response.status_code == 500
    assert "error" in response.json()


def test_unparseable_reply_falls_back(client, gateway):
    gateway.response = _reply("I cannot help with that.")
    response = client.post(URL, json={"workout_type": "spinning"})
    assert response.status_code == 200
    assert [e["name"] for e in response.json()["exercises"]] == ["Warm-up Ride", "Hill Climb", "Sprint Intervals"]


def test_content_parts_reply_falls_back(client, gateway):
    gateway.response = _reply([{"type": "text", "text": "{\"exercises\": []}"}])
    response = client.post(URL, json={"workout_type": "cardio"})
    assert response.status_code == 200
    assert response.json()["exercises"] == get_fallback_exercises("cardio")
    assert response.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.parametrize("payload", [
    [],
    {"choices": []},
    {"choices": "none"},
    {"choices": ["text"]},
    {"choices": [{"message": "Squats"}]},
])
def test_malformed_completion_falls_back(client, gateway, payload):
    gateway.response = FakeResponse(200, payload)
    response = client.post(URL, json={"workout_type": "hiit"})
    assert response.status_code == 200
    assert response.json()["exercises"] == get_fallback_exercises("hiit")


def test_missing_api_key(client, monkeypatch):
    monkeypatch.setattr(settings, "ai_gateway_api_key", None)
    response = client.post(URL, json={"workout_type": "hiit"})
    assert response.status_code == 500
    assert response.json() == {"error": "AI_GATEWAY_API_KEY is not configured"}


def test_preflight(client):
    response = client.options(URL)
    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "apikey" in response.headers["Access-Control-Allow-Headers"]


def test_parse_exercises():
    assert parse_exercises('{"exercises": [{"name": "Plank"}]}', "other") == [{"name": "Plank"}]
    assert parse_exercises('{"something": 1}', "other") == []
    assert parse_exercises('{"exercises": [broken', "hiit") == get_fallback_exercises("hiit")
    assert parse_exercises(None, "weights") == get_fallback_exercises("weights")
    assert parse_exercises({"exercises": []}, "yoga") == get_fallback_exercises("yoga")


def test_unknown_type_uses_other_fallback():
    assert get_fallback_exercises("pilates") == get_fallback_exercises("other")
    assert [e["name"] for e in get_fallback_exercises("pilates")] == ["Stretching", "Yoga Flow"]
