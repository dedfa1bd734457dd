"""Member service - profile access rules"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Member, Trainer, User
from .repository import MemberRepository
from .schemas import MemberAdminUpdate, MemberUpdate

logger = logging.getLogger(__name__)

STAFF_ROLES = ("trainer", "admin")


class MemberService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = MemberRepository()

    def list_members(self) -> list[Member]:
        return self.repo.list_members(self.db)

    def _check_can_view(self, member: Member, user: User) -> None:
        if member.user_id != user.id and user.role not in STAFF_ROLES:
            raise HTTPException(status_code=403, detail="Not authorized to view this member")

    def get_member(self, member_id: int, user: User) -> Member:
        member = self.repo.get_by_id(self.db, member_id)
        if not member:
            raise HTTPException(status_code=404, detail="Member not found")
        self._check_can_view(member, user)
        return member

    def get_by_user(self, user_id: int, user: User) -> Member:
        member = self.repo.get_by_user_id(self.db, user_id)
        if not member:
            raise HTTPException(status_code=404, detail="Member not found")
        self._check_can_view(member, user)
        return member

    def require_profile(self, user: User) -> Member:
        """Member profile of the caller; bookings and waitlists hang off it"""
        member = self.repo.get_by_user_id(self.db, user.id)
        if not member:
            raise HTTPException(status_code=404, detail="Member profile not found")
        return member

    def update_member(self, member_id: int, data: MemberAdminUpdate, user: User) -> Member:
        member = self.repo.get_by_id(self.db, member_id)
        if not member:
            raise HTTPException(status_code=404, detail="Member not found")
        if member.user_id != user.id and user.role != "admin":
            raise HTTPException(status_code=403, detail="Not authorized to update this member")

        updates = data.model_dump(exclude_unset=True)
        if user.role != "admin":
            # Members cannot change their own status, trainer assignment or staff notes
            updates = {k: v for k, v in updates.items() if k in MemberUpdate.model_fields}

        trainer_id = updates.get("assigned_trainer_id")
        if trainer_id is not None and not self.db.get(Trainer, trainer_id):
            raise HTTPException(status_code=404, detail="Trainer not found")

        return self.repo.update(self.db, member, **updates)

    def delete_member(self, member_id: int) -> None:
        member = self.repo.get_by_id(self.db, member_id)
        if not member:
            raise HTTPException(status_code=404, detail="Member not found")
        self.repo.delete(self.db, member)
        logger.info(f"🗑️ Member profile {member_id} removed")
