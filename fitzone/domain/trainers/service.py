"""Trainer service - trainer profiles and the linked login role"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import GymClass, Member, Trainer, User
from .repository import TrainerRepository
from .schemas import TrainerCreate, TrainerUpdate

logger = logging.getLogger(__name__)


class TrainerService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TrainerRepository()

    def list_trainers(self, include_unavailable: bool = False) -> list[Trainer]:
        return self.repo.list_trainers(self.db, include_unavailable)

    def get_trainer(self, trainer_id: int) -> Trainer:
        trainer = self.repo.get_by_id(self.db, trainer_id)
        if not trainer:
            raise HTTPException(status_code=404, detail="Trainer not found")
        return trainer

    def create_trainer(self, data: TrainerCreate) -> Trainer:
        if not data.name or not data.name.strip():
            raise HTTPException(status_code=400, detail="Please provide trainer name")

        linked_user_id = None
        if data.user_id:
            user = self.db.get(User, data.user_id)
            if user:
                # Linked accounts get trainer privileges
                user.role = "trainer"
                linked_user_id = user.id

        fields = data.model_dump(exclude_unset=True, exclude={"user_id", "name"})
        trainer = self.repo.create(
            self.db,
            user_id=linked_user_id,
            name=data.name.strip(),
            email=fields.get("email") or "",
            phone=fields.get("phone") or "",
            image=fields.get("image") or "",
            specializations=fields.get("specializations") or [],
            experience=fields.get("experience") or 1,
            certifications=fields.get("certifications") or [],
            bio=fields.get("bio") or "",
            hourly_rate=fields.get("hourly_rate") or 50,
            availability=fields.get("availability") or [],
            rating=fields.get("rating") or 4.5,
            achievements=fields.get("achievements") or [],
            social_media=fields.get("social_media") or {},
            is_available=True,
        )
        logger.info(f"✅ Trainer created: {trainer.name} (id={trainer.id})")
        return trainer

    def update_trainer(self, trainer_id: int, data: TrainerUpdate, user: User) -> Trainer:
        trainer = self.get_trainer(trainer_id)
        if user.role != "admin" and trainer.user_id != user.id:
            raise HTTPException(status_code=403, detail="Not authorized to update this trainer")

        updates = data.model_dump(exclude_unset=True)
        if "name" in updates:
            if not updates["name"] or not updates["name"].strip():
                raise HTTPException(status_code=400, detail="Please provide trainer name")
            updates["name"] = updates["name"].strip()
            # Keep denormalised class copies in sync
            self.db.query(GymClass).filter(GymClass.trainer_id == trainer.id).update(
                {"trainer_name": updates["name"]}, synchronize_session=False
            )
        return self.repo.update(self.db, trainer, **updates)

    def delete_trainer(self, trainer_id: int) -> None:
        trainer = self.get_trainer(trainer_id)
        if trainer.user_id:
            linked = self.db.get(User, trainer.user_id)
            if linked and linked.role == "trainer":
                linked.role = "member"

        self.db.query(GymClass).filter(GymClass.trainer_id == trainer.id).update(
            {"trainer_id": None}, synchronize_session=False
        )
        self.db.query(Member).filter(Member.assigned_trainer_id == trainer.id).update(
            {"assigned_trainer_id": None}, synchronize_session=False
        )
        self.db.delete(trainer)
        self.db.commit()
        logger.info(f"🗑️ Trainer {trainer_id} removed")
