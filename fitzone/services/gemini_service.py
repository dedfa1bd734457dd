"""
Gemini Service
Thin client for the Google Generative Language `generateContent` endpoint.
"""

import logging
from typing import Optional

import httpx

from ..config import GEMINI_API_KEY, GEMINI_API_URL, GEMINI_MODEL

logger = logging.getLogger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 500,
}

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


def is_configured() -> bool:
    return bool(GEMINI_API_KEY)


def extract_text(data: dict) -> Optional[str]:
    """candidates[0].content.parts[0].text, or None when any step is missing"""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text.strip() else None


async def generate_content(contents: list[dict], timeout: float = 20.0) -> Optional[str]:
    """
    Ask Gemini for the next model turn

    Args:
        contents: Gemini `contents` list of {role, parts: [{text}]}

    Returns:
        The generated text, or None when unconfigured, on HTTP errors or on an empty answer
    """
    if not is_configured():
        return None

    url = f"{GEMINI_API_URL}/{GEMINI_MODEL}:generateContent"
    payload = {
        "contents": contents,
        "generationConfig": GENERATION_CONFIG,
        "safetySettings": SAFETY_SETTINGS,
    }
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(url, params={"key": GEMINI_API_KEY}, json=payload)
    except httpx.HTTPError as e:
        logger.warning(f"⚠️ Gemini request failed: {e}")
        return None

    if response.status_code != 200:
        logger.warning(f"⚠️ Gemini returned {response.status_code}: {response.text[:200]}")
        return None

    try:
        data = response.json()
    except ValueError:
        logger.warning("⚠️ Gemini returned a non-JSON body")
        return None
    return extract_text(data)
