"""Equipment router - public listing, admin maintenance"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import admin_required
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import EquipmentCreate, EquipmentResponse, EquipmentStatus, EquipmentUpdate
from .service import EquipmentService

router = APIRouter(prefix="/api/equipment", tags=["Equipment"])


def get_equipment_service(db: Session = Depends(get_db)) -> EquipmentService:
    """Dependency injection for EquipmentService"""
    return EquipmentService(db)


@router.get("")
async def get_equipment(
    category: Optional[str] = None,
    status: Optional[EquipmentStatus] = None,
    service: EquipmentService = Depends(get_equipment_service),
):
    items = [EquipmentResponse.model_validate(e) for e in service.list_equipment(category, status)]
    return success(items, count=len(items))


@router.get("/{equipment_id}")
async def get_equipment_by_id(equipment_id: int, service: EquipmentService = Depends(get_equipment_service)):
    return success(EquipmentResponse.model_validate(service.get(equipment_id)))


@router.post("", status_code=201)
async def create_equipment(
    data: EquipmentCreate,
    _: User = Depends(admin_required),
    service: EquipmentService = Depends(get_equipment_service),
):
    return success(EquipmentResponse.model_validate(service.create(data)))


@router.put("/{equipment_id}")
async def update_equipment(
    equipment_id: int,
    data: EquipmentUpdate,
    _: User = Depends(admin_required),
    service: EquipmentService = Depends(get_equipment_service),
):
    return success(EquipmentResponse.model_validate(service.update(equipment_id, data)))


@router.delete("/{equipment_id}")
async def delete_equipment(
    equipment_id: int,
    _: User = Depends(admin_required),
    service: EquipmentService = Depends(get_equipment_service),
):
    service.delete(equipment_id)
    return success(message="Equipment removed")


__all__ = ["router"]
