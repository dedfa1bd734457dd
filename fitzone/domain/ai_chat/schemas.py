from typing import Literal, Optional

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    role: Literal["user", "assistant", "model"] = "user"
    content: str


class ChatRequest(BaseModel):
    # Optional so an empty body reaches the service and gets the friendly 400
    message: Optional[str] = Field(None, max_length=2000)
    conversation_history: list[ChatTurn] = []


class ChatReply(BaseModel):
    message: str
    source: Literal["gemini", "fallback"]
