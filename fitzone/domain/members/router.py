"""Member router - profile endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import admin_required, get_current_user, trainer_required
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import MemberAdminUpdate, MemberResponse
from .service import MemberService

router = APIRouter(prefix="/api/members", tags=["Members"])


def get_member_service(db: Session = Depends(get_db)) -> MemberService:
    """Dependency injection for MemberService"""
    return MemberService(db)


@router.get("")
async def get_members(
    _: User = Depends(trainer_required),
    service: MemberService = Depends(get_member_service),
):
    members = [MemberResponse.model_validate(m) for m in service.list_members()]
    return success(members, count=len(members))


@router.get("/user/{user_id}")
async def get_member_by_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
):
    return success(MemberResponse.model_validate(service.get_by_user(user_id, current_user)))


@router.get("/{member_id}")
async def get_member(
    member_id: int,
    current_user: User = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
):
    return success(MemberResponse.model_validate(service.get_member(member_id, current_user)))


@router.put("/{member_id}")
async def update_member(
    member_id: int,
    data: MemberAdminUpdate,
    current_user: User = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
):
    member = service.update_member(member_id, data, current_user)
    return success(MemberResponse.model_validate(member))


@router.delete("/{member_id}")
async def delete_member(
    member_id: int,
    _: User = Depends(admin_required),
    service: MemberService = Depends(get_member_service),
):
    service.delete_member(member_id)
    return success(message="Member removed")


__all__ = ["router", "get_member_service"]
