"""Membership plan router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import admin_required
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import PlanCreate, PlanResponse, PlanUpdate
from .service import PlanService

router = APIRouter(prefix="/api/subscriptions", tags=["Subscriptions"])


def get_plan_service(db: Session = Depends(get_db)) -> PlanService:
    """Dependency injection for PlanService"""
    return PlanService(db)


@router.get("")
async def get_plans(service: PlanService = Depends(get_plan_service)):
    plans = service.list_active()
    return success(plans, count=len(plans))


@router.get("/{plan_id}")
async def get_plan(plan_id: int, service: PlanService = Depends(get_plan_service)):
    return success(PlanResponse.model_validate(service.get_plan(plan_id)))


@router.post("", status_code=201)
async def create_plan(
    data: PlanCreate,
    _: User = Depends(admin_required),
    service: PlanService = Depends(get_plan_service),
):
    return success(PlanResponse.model_validate(service.create_plan(data)))


@router.put("/{plan_id}")
async def update_plan(
    plan_id: int,
    data: PlanUpdate,
    _: User = Depends(admin_required),
    service: PlanService = Depends(get_plan_service),
):
    return success(PlanResponse.model_validate(service.update_plan(plan_id, data)))


@router.delete("/{plan_id}")
async def delete_plan(
    plan_id: int,
    _: User = Depends(admin_required),
    service: PlanService = Depends(get_plan_service),
):
    service.delete_plan(plan_id)
    return success(message="Subscription removed")


__all__ = ["router"]
