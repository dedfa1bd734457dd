"""Site content service shared by the team and testimonial sections"""

import logging
from datetime import datetime
from typing import Union

from fastapi import HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ...models import TeamMember, Testimonial

logger = logging.getLogger(__name__)

ContentModel = Union[type[TeamMember], type[Testimonial]]

LABELS = {TeamMember: "Team member", Testimonial: "Testimonial"}


class SiteContentService:
    def __init__(self, db: Session, model: ContentModel):
        self.db = db
        self.model = model
        self.label = LABELS[model]

    def list_items(self, include_inactive: bool = False):
        query = self.db.query(self.model)
        if not include_inactive:
            query = query.filter(self.model.is_active.is_(True))
        return query.order_by(self.model.order.asc(), self.model.created_at.desc()).all()

    def get(self, item_id: int):
        item = self.db.query(self.model).filter(self.model.id == item_id).first()
        if not item:
            raise HTTPException(status_code=404, detail=f"{self.label} not found")
        return item

    def create(self, data: BaseModel):
        item = self.model(**data.model_dump(), created_at=datetime.utcnow())
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"📝 {self.label} {item.id} created")
        return item

    def update(self, item_id: int, data: BaseModel):
        item = self.get(item_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(item, key, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item_id: int) -> None:
        item = self.get(item_id)
        self.db.delete(item)
        self.db.commit()
        logger.info(f"🗑️ {self.label} {item_id} deleted")
