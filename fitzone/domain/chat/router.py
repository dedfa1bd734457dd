"""Member <-> admin support chat router (polling, no sockets)"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import admin_required, get_current_user
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import ConversationResponse, MessageResponse, SendMessageRequest
from .service import ChatService

router = APIRouter(prefix="/api/chat", tags=["Chat"])


def get_chat_service(db: Session = Depends(get_db)) -> ChatService:
    """Dependency injection for ChatService"""
    return ChatService(db)


@router.get("/my-conversation")
async def get_my_conversation(
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    return success(ConversationResponse.model_validate(service.my_conversation(current_user)))


@router.get("/messages/{conversation_id}")
async def get_messages(
    conversation_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    messages = service.messages(conversation_id, current_user, page, limit)
    return success(
        [MessageResponse.model_validate(m) for m in messages],
        pagination={"page": page, "limit": limit},
    )


@router.post("/messages", status_code=201)
async def send_message(
    data: SendMessageRequest,
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    message = service.send(data.content, data.conversation_id, current_user)
    return success(MessageResponse.model_validate(message))


@router.put("/messages/{conversation_id}/read")
async def mark_messages_read(
    conversation_id: int,
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    service.mark_read(conversation_id, current_user)
    return success(message="Messages marked as read")


@router.get("/unread-count")
async def get_unread_count(
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    return success(unread_count=service.unread_count(current_user))


@router.get("/conversations")
async def get_all_conversations(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    _: User = Depends(admin_required),
    service: ChatService = Depends(get_chat_service),
):
    conversations, page_info, total_unread = service.conversations(page, limit, search)
    return success(
        [ConversationResponse.model_validate(c) for c in conversations],
        total_unread=total_unread,
        pagination=page_info,
    )


@router.get("/conversation/member/{member_id}")
async def get_conversation_by_member(
    member_id: int,
    _: User = Depends(admin_required),
    service: ChatService = Depends(get_chat_service),
):
    return success(ConversationResponse.model_validate(service.conversation_for_member(member_id)))


@router.delete("/conversation/{conversation_id}")
async def delete_conversation(
    conversation_id: int,
    _: User = Depends(admin_required),
    service: ChatService = Depends(get_chat_service),
):
    service.archive(conversation_id)
    return success(message="Conversation archived")


__all__ = ["router"]
