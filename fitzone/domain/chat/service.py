"""
Chat service
One conversation per member; any admin may answer. Unread counters are kept
per side and reset when that side opens the thread.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Conversation, Message, User
from ...security_utils import sanitize_text
from ...shared.responses import paginate_query
from .repository import ChatRepository

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100


def reader_role(user: User) -> str:
    return "admin" if user.role == "admin" else "member"


class ChatService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ChatRepository()

    def _get_or_create(self, member: User) -> Conversation:
        conversation = self.repo.conversation_for_member(self.db, member.id)
        if conversation is None:
            conversation = Conversation(member_id=member.id)
            self.db.add(conversation)
            self.db.commit()
            self.db.refresh(conversation)
            logger.info(f"💬 Conversation {conversation.id} opened for user {member.id}")
        return conversation

    def _mark_read(self, conversation: Conversation, role: str) -> None:
        if role == "admin":
            conversation.unread_by_admin = 0
        else:
            conversation.unread_by_member = 0
        other = "member" if role == "admin" else "admin"
        self.repo.mark_messages_read(self.db, conversation.id, other)
        self.db.commit()

    def _authorized(self, conversation_id: int, user: User) -> Conversation:
        conversation = self.repo.get_conversation(self.db, conversation_id)
        if not conversation:
            raise HTTPException(status_code=404, detail="Conversation not found")
        if user.role != "admin" and conversation.member_id != user.id:
            raise HTTPException(status_code=403, detail="Not authorized to access this conversation")
        return conversation

    def my_conversation(self, user: User) -> Conversation:
        conversation = self._get_or_create(user)
        self._mark_read(conversation, "member")
        self.db.refresh(conversation)
        return conversation

    def messages(self, conversation_id: int, user: User, page: int, limit: int) -> list[Message]:
        conversation = self._authorized(conversation_id, user)
        messages = self.repo.messages_page(self.db, conversation.id, page, limit)
        self._mark_read(conversation, reader_role(user))
        return messages

    def send(self, content: Optional[str], conversation_id: Optional[int], user: User) -> Message:
        text = sanitize_text(content or "").strip()
        if not text:
            raise HTTPException(status_code=400, detail="Message content is required")

        role = reader_role(user)
        if conversation_id:
            conversation = self._authorized(conversation_id, user)
        else:
            if role == "admin":
                raise HTTPException(status_code=400, detail="Admin must specify a conversation ID")
            conversation = self._get_or_create(user)

        now = datetime.utcnow()
        message = Message(
            conversation_id=conversation.id,
            sender_id=user.id,
            sender_role=role,
            content=text,
            created_at=now,
        )
        self.db.add(message)

        conversation.last_message = text[:PREVIEW_LENGTH]
        conversation.last_message_at = now
        conversation.last_message_by = role
        conversation.is_active = True
        if role == "member":
            conversation.unread_by_admin = (conversation.unread_by_admin or 0) + 1
        else:
            conversation.unread_by_member = (conversation.unread_by_member or 0) + 1

        self.db.commit()
        self.db.refresh(message)
        return message

    def mark_read(self, conversation_id: int, user: User) -> None:
        conversation = self._authorized(conversation_id, user)
        self._mark_read(conversation, reader_role(user))

    def unread_count(self, user: User) -> int:
        if user.role == "admin":
            return self.repo.admin_unread_total(self.db)
        conversation = self.repo.conversation_for_member(self.db, user.id)
        return conversation.unread_by_member if conversation else 0

    def conversations(self, page: int, limit: int, search: Optional[str]):
        items, page_info = paginate_query(self.repo.active_conversations(self.db, search), page, limit)
        return items, page_info, self.repo.admin_unread_total(self.db)

    def conversation_for_member(self, member_id: int) -> Conversation:
        member = self.db.query(User).filter(User.id == member_id).first()
        if not member:
            raise HTTPException(status_code=404, detail="Member not found")
        conversation = self._get_or_create(member)
        self._mark_read(conversation, "admin")
        self.db.refresh(conversation)
        return conversation

    def archive(self, conversation_id: int) -> None:
        conversation = self.repo.get_conversation(self.db, conversation_id)
        if not conversation:
            raise HTTPException(status_code=404, detail="Conversation not found")
        conversation.is_active = False
        self.db.commit()
        logger.info(f"🗄️ Conversation {conversation_id} archived")
