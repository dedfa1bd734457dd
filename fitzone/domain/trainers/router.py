"""Trainer router"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import admin_required, trainer_required
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import TrainerCreate, TrainerResponse, TrainerUpdate
from .service import TrainerService

router = APIRouter(prefix="/api/trainers", tags=["Trainers"])


def get_trainer_service(db: Session = Depends(get_db)) -> TrainerService:
    """Dependency injection for TrainerService"""
    return TrainerService(db)


@router.get("")
async def get_trainers(
    include_all: bool = Query(False, alias="all", description="Include unavailable trainers"),
    service: TrainerService = Depends(get_trainer_service),
):
    trainers = [TrainerResponse.model_validate(t) for t in service.list_trainers(include_all)]
    return success(trainers, count=len(trainers))


@router.get("/{trainer_id}")
async def get_trainer(trainer_id: int, service: TrainerService = Depends(get_trainer_service)):
    return success(TrainerResponse.model_validate(service.get_trainer(trainer_id)))


@router.post("", status_code=201)
async def create_trainer(
    data: TrainerCreate,
    _: User = Depends(admin_required),
    service: TrainerService = Depends(get_trainer_service),
):
    return success(TrainerResponse.model_validate(service.create_trainer(data)))


@router.put("/{trainer_id}")
async def update_trainer(
    trainer_id: int,
    data: TrainerUpdate,
    current_user: User = Depends(trainer_required),
    service: TrainerService = Depends(get_trainer_service),
):
    trainer = service.update_trainer(trainer_id, data, current_user)
    return success(TrainerResponse.model_validate(trainer))


@router.delete("/{trainer_id}")
async def delete_trainer(
    trainer_id: int,
    _: User = Depends(admin_required),
    service: TrainerService = Depends(get_trainer_service),
):
    service.delete_trainer(trainer_id)
    return success(message="Trainer removed")


__all__ = ["router"]
