"""Class service - class catalogue and standing enrollments"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ClassEnrollment, GymClass, Trainer, User
from ...models_booking import Booking, RecurringBooking, Waitlist
from .repository import ClassRepository
from .schemas import ClassCreate, ClassUpdate

logger = logging.getLogger(__name__)


class ClassService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ClassRepository()

    def list_classes(self) -> list[GymClass]:
        return self.repo.list_active(self.db)

    def get_class(self, class_id: int) -> GymClass:
        gym_class = self.repo.get_by_id(self.db, class_id)
        if not gym_class:
            raise HTTPException(status_code=404, detail="Class not found")
        return gym_class

    def _trainer_name(self, trainer_id: Optional[int]) -> Optional[str]:
        if trainer_id is None:
            return None
        trainer = self.db.get(Trainer, trainer_id)
        if not trainer:
            raise HTTPException(status_code=404, detail="Trainer not found")
        return trainer.name

    def create_class(self, data: ClassCreate) -> GymClass:
        fields = data.model_dump(exclude_none=True)
        fields["slug"] = self.repo.unique_slug(self.db, data.name)
        fields["trainer_name"] = self._trainer_name(data.trainer_id)
        gym_class = self.repo.create(self.db, **fields)
        logger.info(f"✅ Class created: {gym_class.name} ({gym_class.slug})")
        return gym_class

    def update_class(self, class_id: int, data: ClassUpdate) -> GymClass:
        gym_class = self.get_class(class_id)
        updates = data.model_dump(exclude_unset=True)
        if "trainer_id" in updates:
            updates["trainer_name"] = self._trainer_name(updates["trainer_id"])
        return self.repo.update(self.db, gym_class, **updates)

    def delete_class(self, class_id: int) -> None:
        gym_class = self.get_class(class_id)
        for model in (Booking, Waitlist, RecurringBooking):
            self.db.query(model).filter(model.class_id == class_id).delete(synchronize_session=False)
        self.db.delete(gym_class)
        self.db.commit()
        logger.info(f"🗑️ Class {class_id} removed")

    def _target_user(self, user: User, user_id: Optional[int]) -> int:
        if user_id is None or user_id == user.id:
            return user.id
        if user.role != "admin":
            raise HTTPException(status_code=403, detail="Not authorized to enroll other members")
        if not self.db.get(User, user_id):
            raise HTTPException(status_code=404, detail="User not found")
        return user_id

    def enroll(self, class_id: int, user: User, user_id: Optional[int] = None) -> GymClass:
        gym_class = self.get_class(class_id)
        target_id = self._target_user(user, user_id)

        if gym_class.enrolled_count >= gym_class.capacity:
            raise HTTPException(status_code=400, detail="Class is full")
        if self.repo.get_enrollment(self.db, class_id, target_id):
            raise HTTPException(status_code=400, detail="Already enrolled in this class")

        self.db.add(ClassEnrollment(class_id=class_id, user_id=target_id))
        self.db.commit()
        self.db.refresh(gym_class)
        return gym_class

    def unenroll(self, class_id: int, user: User, user_id: Optional[int] = None) -> GymClass:
        gym_class = self.get_class(class_id)
        enrollment = self.repo.get_enrollment(self.db, class_id, self._target_user(user, user_id))
        if enrollment:
            self.db.delete(enrollment)
            self.db.commit()
            self.db.refresh(gym_class)
        return gym_class
