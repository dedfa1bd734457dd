"""FitBot AI chat router"""

from fastapi import APIRouter, Depends

from ...auth import get_current_user
from ...models import User
from ...rate_limiter import create_rate_limiter
from ...shared.responses import success
from . import service
from .fallback import random_suggestions
from .schemas import ChatRequest

router = APIRouter(prefix="/api/ai-chat", tags=["AI Chat"])

chat_limiter = create_rate_limiter(limit=20, window_seconds=60, key_prefix="ai_chat")


@router.post("")
async def chat_with_ai(
    data: ChatRequest,
    _: None = Depends(chat_limiter),
    current_user: User = Depends(get_current_user),
):
    reply = await service.chat(data.message, data.conversation_history)
    return success(reply)


@router.get("/suggestions")
async def get_suggestions(current_user: User = Depends(get_current_user)):
    return success(random_suggestions())


__all__ = ["router"]
