"""Equipment inventory service"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Equipment
from .schemas import EquipmentCreate, EquipmentUpdate

logger = logging.getLogger(__name__)


class EquipmentService:
    def __init__(self, db: Session):
        self.db = db

    def list_equipment(self, category: Optional[str] = None, status: Optional[str] = None) -> list[Equipment]:
        query = self.db.query(Equipment)
        if category:
            query = query.filter(Equipment.category == category)
        if status:
            query = query.filter(Equipment.status == status)
        return query.order_by(Equipment.category, Equipment.name).all()

    def get(self, equipment_id: int) -> Equipment:
        equipment = self.db.query(Equipment).filter(Equipment.id == equipment_id).first()
        if not equipment:
            raise HTTPException(status_code=404, detail="Equipment not found")
        return equipment

    def create(self, data: EquipmentCreate) -> Equipment:
        equipment = Equipment(**data.model_dump())
        self.db.add(equipment)
        self.db.commit()
        self.db.refresh(equipment)
        logger.info(f"🏋️ Equipment {equipment.id} added: {equipment.name}")
        return equipment

    def update(self, equipment_id: int, data: EquipmentUpdate) -> Equipment:
        equipment = self.get(equipment_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(equipment, key, value)
        self.db.commit()
        self.db.refresh(equipment)
        return equipment

    def delete(self, equipment_id: int) -> None:
        equipment = self.get(equipment_id)
        self.db.delete(equipment)
        self.db.commit()
        logger.info(f"🗑️ Equipment {equipment_id} removed")
