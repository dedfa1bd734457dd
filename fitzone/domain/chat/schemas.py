"""Member <-> admin chat schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
    conversation_id: Optional[int] = None
    content: Optional[str] = Field(None, max_length=5000)


class ChatUser(BaseModel):
    id: int
    full_name: str
    email: Optional[str] = None
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    sender_role: str
    content: str
    is_read: bool
    created_at: datetime
    sender: Optional[ChatUser] = None

    class Config:
        from_attributes = True


class ConversationResponse(BaseModel):
    id: int
    member_id: int
    last_message: Optional[str] = ""
    last_message_at: Optional[datetime] = None
    last_message_by: Optional[str] = None
    unread_by_admin: int
    unread_by_member: int
    is_active: bool
    created_at: Optional[datetime] = None
    member: Optional[ChatUser] = None

    class Config:
        from_attributes = True
