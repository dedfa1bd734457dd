import pytest

from fitzone.domain.ai_chat import service
from fitzone.domain.ai_chat.fallback import FALLBACK_RESPONSES, SUGGESTIONS, keyword_category
from fitzone.domain.ai_chat.schemas import ChatTurn
from fitzone.services import gemini_service


@pytest.mark.parametrize(
    "message, category",
    [
        ("Hello there", "greeting"),
        ("Say hello", "default"),
        ("Best cardio for fat loss?", "workout"),
        ("How much protein per day", "nutrition"),
        ("I feel lazy today", "motivation"),
        ("What does the premium plan cost", "membership"),
        ("When is the zumba class", "classes"),
        ("What is the capital of France", "default"),
    ],
)
def test_keyword_category(message, category):
    assert keyword_category(message) == category


def test_history_is_trimmed_to_recent_turns():
    history = [ChatTurn(role="user" if i % 2 else "assistant", content=f"turn {i}") for i in range(10)]
    contents = service.build_contents("next", history)
    # context + priming reply + last six turns + the new message
    assert len(contents) == 9
    assert contents[2]["parts"][0]["text"] == "turn 4"
    assert contents[2]["role"] == "model"
    assert contents[-1] == {"role": "user", "parts": [{"text": "next"}]}


def test_extract_text_handles_missing_candidates():
    assert gemini_service.extract_text({"candidates": []}) is None
    assert gemini_service.extract_text({"candidates": [{"content": {"parts": [{"text": "Hi"}]}}]}) == "Hi"


def test_fallback_without_api_key(client, member_headers):
    response = client.post("/api/ai-chat", json={"message": "Give me a workout plan"}, headers=member_headers)
    assert response.status_code == 200
    reply = response.json()["data"]
    assert reply["source"] == "fallback"
    assert reply["message"] in FALLBACK_RESPONSES["workout"]


def test_gemini_answer_is_used(client, member_headers, monkeypatch):
    async def fake_generate(contents, timeout=20.0):
        return "Squats, then lunges."

    monkeypatch.setattr(gemini_service, "is_configured", lambda: True)
    monkeypatch.setattr(gemini_service, "generate_content", fake_generate)

    reply = client.post("/api/ai-chat", json={"message": "Leg day?"}, headers=member_headers).json()["data"]
    assert reply == {"message": "Squats, then lunges.", "source": "gemini"}


def test_gemini_failure_falls_back(client, member_headers, monkeypatch):
    async def no_answer(contents, timeout=20.0):
        return None

    monkeypatch.setattr(gemini_service, "is_configured", lambda: True)
    monkeypatch.setattr(gemini_service, "generate_content", no_answer)

    reply = client.post("/api/ai-chat", json={"message": "hi"}, headers=member_headers).json()["data"]
    assert reply["source"] == "fallback"
    assert reply["message"] in FALLBACK_RESPONSES["greeting"]


def test_empty_message_rejected(client, member_headers):
    response = client.post("/api/ai-chat", json={"message": "   "}, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Message is required"


def test_chat_requires_login(client):
    assert client.post("/api/ai-chat", json={"message": "hi"}).status_code == 401


def test_suggestions(client, member_headers):
    suggestions = client.get("/api/ai-chat/suggestions", headers=member_headers).json()["data"]
    assert len(suggestions) == 4
    assert set(suggestions) <= set(SUGGESTIONS)
