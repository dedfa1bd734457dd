"""
FitBot chat service
Asks Gemini when a key is configured and falls back to keyword-matched canned answers otherwise.
"""

import logging
from typing import Optional

from fastapi import HTTPException

from ...services import gemini_service
from .fallback import fallback_response
from .schemas import ChatReply, ChatTurn

logger = logging.getLogger(__name__)

FITNESS_CONTEXT = """You are FitBot, a friendly and knowledgeable AI fitness assistant for FitZone Gym.
You help members with:
- Workout routines and exercise techniques
- Nutrition and diet advice
- Gym membership information
- Class schedules and recommendations
- Fitness goals and motivation
- General health and wellness tips

Keep responses concise, friendly, and encouraging. Use emojis occasionally to be engaging.
If asked about specific gym policies or pricing, suggest contacting the admin through the chat feature.
Always prioritize safety and recommend consulting professionals for medical concerns."""

PRIMING_REPLY = (
    "I understand! I'm FitBot, ready to help FitZone members with fitness advice, workout tips, "
    "nutrition guidance, and gym information. How can I assist you today? 💪"
)

HISTORY_TURNS = 6


def build_contents(message: str, history: list[ChatTurn]) -> list[dict]:
    contents = [
        {"role": "user", "parts": [{"text": FITNESS_CONTEXT}]},
        {"role": "model", "parts": [{"text": PRIMING_REPLY}]},
    ]
    for turn in history[-HISTORY_TURNS:]:
        contents.append(
            {"role": "user" if turn.role == "user" else "model", "parts": [{"text": turn.content}]}
        )
    contents.append({"role": "user", "parts": [{"text": message}]})
    return contents


async def chat(message: Optional[str], history: list[ChatTurn]) -> ChatReply:
    if not message or not message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    if gemini_service.is_configured():
        text = await gemini_service.generate_content(build_contents(message, history))
        if text:
            return ChatReply(message=text, source="gemini")
        logger.info("🤖 Gemini gave no answer, using fallback response")

    return ChatReply(message=fallback_response(message), source="fallback")
