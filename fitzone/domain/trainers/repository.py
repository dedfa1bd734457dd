"""Trainer repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Trainer


class TrainerRepository:
    @staticmethod
    def list_trainers(db: Session, include_unavailable: bool = False) -> list[Trainer]:
        query = db.query(Trainer)
        if not include_unavailable:
            query = query.filter(Trainer.is_available.is_(True))
        return query.order_by(Trainer.name).all()

    @staticmethod
    def get_by_id(db: Session, trainer_id: int) -> Optional[Trainer]:
        return db.query(Trainer).filter(Trainer.id == trainer_id).first()

    @staticmethod
    def create(db: Session, **trainer_data) -> Trainer:
        trainer = Trainer(**trainer_data)
        db.add(trainer)
        db.commit()
        db.refresh(trainer)
        return trainer

    @staticmethod
    def update(db: Session, trainer: Trainer, **updates) -> Trainer:
        for key, value in updates.items():
            if hasattr(trainer, key):
                setattr(trainer, key, value)
        db.commit()
        db.refresh(trainer)
        return trainer
