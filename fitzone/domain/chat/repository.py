"""Chat repository"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Conversation, Message, User


class ChatRepository:
    @staticmethod
    def get_conversation(db: Session, conversation_id: int) -> Optional[Conversation]:
        return (
            db.query(Conversation)
            .options(joinedload(Conversation.member))
            .filter(Conversation.id == conversation_id)
            .first()
        )

    @staticmethod
    def conversation_for_member(db: Session, member_id: int) -> Optional[Conversation]:
        return db.query(Conversation).filter(Conversation.member_id == member_id).first()

    @staticmethod
    def messages_page(db: Session, conversation_id: int, page: int, limit: int) -> list[Message]:
        """Newest page first, returned oldest-to-newest for display"""
        rows = (
            db.query(Message)
            .options(joinedload(Message.sender))
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return list(reversed(rows))

    @staticmethod
    def mark_messages_read(db: Session, conversation_id: int, sender_role: str) -> int:
        return (
            db.query(Message)
            .filter(
                Message.conversation_id == conversation_id,
                Message.is_read.is_(False),
                Message.sender_role == sender_role,
            )
            .update({Message.is_read: True}, synchronize_session=False)
        )

    @staticmethod
    def active_conversations(db: Session, search: Optional[str] = None):
        query = (
            db.query(Conversation)
            .join(User, Conversation.member_id == User.id)
            .options(joinedload(Conversation.member))
            .filter(Conversation.is_active.is_(True))
        )
        if search:
            query = query.filter(func.lower(User.full_name).like(f"%{search.lower()}%"))
        # NULLs (never messaged) sort last
        return query.order_by(Conversation.last_message_at.is_(None), Conversation.last_message_at.desc())

    @staticmethod
    def admin_unread_total(db: Session) -> int:
        total = (
            db.query(func.coalesce(func.sum(Conversation.unread_by_admin), 0))
            .filter(Conversation.is_active.is_(True))
            .scalar()
        )
        return int(total or 0)
