"""Class router"""

from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ...auth import admin_required, get_current_user
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import ClassCreate, ClassResponse, ClassUpdate, EnrollRequest
from .service import ClassService

router = APIRouter(prefix="/api/classes", tags=["Classes"])


def get_class_service(db: Session = Depends(get_db)) -> ClassService:
    """Dependency injection for ClassService"""
    return ClassService(db)


@router.get("")
async def get_classes(service: ClassService = Depends(get_class_service)):
    classes = [ClassResponse.model_validate(c) for c in service.list_classes()]
    return success(classes, count=len(classes))


@router.get("/{class_id}")
async def get_class(class_id: int, service: ClassService = Depends(get_class_service)):
    return success(ClassResponse.model_validate(service.get_class(class_id)))


@router.post("", status_code=201)
async def create_class(
    data: ClassCreate,
    _: User = Depends(admin_required),
    service: ClassService = Depends(get_class_service),
):
    return success(ClassResponse.model_validate(service.create_class(data)))


@router.put("/{class_id}")
async def update_class(
    class_id: int,
    data: ClassUpdate,
    _: User = Depends(admin_required),
    service: ClassService = Depends(get_class_service),
):
    return success(ClassResponse.model_validate(service.update_class(class_id, data)))


@router.delete("/{class_id}")
async def delete_class(
    class_id: int,
    _: User = Depends(admin_required),
    service: ClassService = Depends(get_class_service),
):
    service.delete_class(class_id)
    return success(message="Class removed")


@router.post("/{class_id}/enroll")
async def enroll_in_class(
    class_id: int,
    data: Optional[EnrollRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    service: ClassService = Depends(get_class_service),
):
    gym_class = service.enroll(class_id, current_user, data.user_id if data else None)
    return success(
        {"available_spots": gym_class.available_spots}, message="Successfully enrolled in class"
    )


@router.post("/{class_id}/unenroll")
async def unenroll_from_class(
    class_id: int,
    data: Optional[EnrollRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    service: ClassService = Depends(get_class_service),
):
    gym_class = service.unenroll(class_id, current_user, data.user_id if data else None)
    return success(
        {"available_spots": gym_class.available_spots}, message="Successfully unenrolled from class"
    )


__all__ = ["router", "get_class_service"]
