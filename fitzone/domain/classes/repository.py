"""Class repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import ClassEnrollment, GymClass, slugify


class ClassRepository:
    @staticmethod
    def list_active(db: Session) -> list[GymClass]:
        return (
            db.query(GymClass)
            .filter(GymClass.is_active.is_(True))
            .order_by(GymClass.is_featured.desc(), GymClass.name)
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, class_id: int) -> Optional[GymClass]:
        return db.query(GymClass).filter(GymClass.id == class_id).first()

    @staticmethod
    def unique_slug(db: Session, name: str, exclude_id: Optional[int] = None) -> str:
        """Slug from the name, suffixed -1, -2, ... until unused"""
        base_slug = slugify(name) or "class"
        slug, counter = base_slug, 1
        while True:
            query = db.query(GymClass.id).filter(GymClass.slug == slug)
            if exclude_id is not None:
                query = query.filter(GymClass.id != exclude_id)
            if not query.first():
                return slug
            slug = f"{base_slug}-{counter}"
            counter += 1

    @staticmethod
    def create(db: Session, **class_data) -> GymClass:
        gym_class = GymClass(**class_data)
        db.add(gym_class)
        db.commit()
        db.refresh(gym_class)
        return gym_class

    @staticmethod
    def update(db: Session, gym_class: GymClass, **updates) -> GymClass:
        for key, value in updates.items():
            if hasattr(gym_class, key):
                setattr(gym_class, key, value)
        db.commit()
        db.refresh(gym_class)
        return gym_class

    @staticmethod
    def get_enrollment(db: Session, class_id: int, user_id: int) -> Optional[ClassEnrollment]:
        return (
            db.query(ClassEnrollment)
            .filter(ClassEnrollment.class_id == class_id, ClassEnrollment.user_id == user_id)
            .first()
        )
