"""Site content router - about-page team and homepage testimonials"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import admin_required
from ...database import get_db
from ...models import TeamMember, Testimonial, User
from ...shared.responses import success
from .schemas import (
    TeamMemberCreate,
    TeamMemberResponse,
    TeamMemberUpdate,
    TestimonialCreate,
    TestimonialResponse,
    TestimonialUpdate,
)
from .service import SiteContentService

router = APIRouter(prefix="/api/site-content", tags=["Site Content"])


def get_team_service(db: Session = Depends(get_db)) -> SiteContentService:
    return SiteContentService(db, TeamMember)


def get_testimonial_service(db: Session = Depends(get_db)) -> SiteContentService:
    return SiteContentService(db, Testimonial)


# ============================================================================
# TEAM
# ============================================================================


@router.get("/team")
async def get_team_members(
    include_all: bool = Query(False, alias="all"),
    service: SiteContentService = Depends(get_team_service),
):
    members = [TeamMemberResponse.model_validate(m) for m in service.list_items(include_inactive=include_all)]
    return success(members, count=len(members))


@router.get("/team/{member_id}")
async def get_team_member(member_id: int, service: SiteContentService = Depends(get_team_service)):
    return success(TeamMemberResponse.model_validate(service.get(member_id)))


@router.post("/team", status_code=201)
async def create_team_member(
    data: TeamMemberCreate,
    _: User = Depends(admin_required),
    service: SiteContentService = Depends(get_team_service),
):
    return success(TeamMemberResponse.model_validate(service.create(data)))


@router.put("/team/{member_id}")
async def update_team_member(
    member_id: int,
    data: TeamMemberUpdate,
    _: User = Depends(admin_required),
    service: SiteContentService = Depends(get_team_service),
):
    return success(TeamMemberResponse.model_validate(service.update(member_id, data)))


@router.delete("/team/{member_id}")
async def delete_team_member(
    member_id: int,
    _: User = Depends(admin_required),
    service: SiteContentService = Depends(get_team_service),
):
    service.delete(member_id)
    return success(message="Team member deleted")


# ============================================================================
# TESTIMONIALS
# ============================================================================


@router.get("/testimonials")
async def get_testimonials(
    include_all: bool = Query(False, alias="all"),
    service: SiteContentService = Depends(get_testimonial_service),
):
    items = [TestimonialResponse.model_validate(t) for t in service.list_items(include_inactive=include_all)]
    return success(items, count=len(items))


@router.get("/testimonials/{testimonial_id}")
async def get_testimonial(testimonial_id: int, service: SiteContentService = Depends(get_testimonial_service)):
    return success(TestimonialResponse.model_validate(service.get(testimonial_id)))


@router.post("/testimonials", status_code=201)
async def create_testimonial(
    data: TestimonialCreate,
    _: User = Depends(admin_required),
    service: SiteContentService = Depends(get_testimonial_service),
):
    return success(TestimonialResponse.model_validate(service.create(data)))


@router.put("/testimonials/{testimonial_id}")
async def update_testimonial(
    testimonial_id: int,
    data: TestimonialUpdate,
    _: User = Depends(admin_required),
    service: SiteContentService = Depends(get_testimonial_service),
):
    return success(TestimonialResponse.model_validate(service.update(testimonial_id, data)))


@router.delete("/testimonials/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: int,
    _: User = Depends(admin_required),
    service: SiteContentService = Depends(get_testimonial_service),
):
    service.delete(testimonial_id)
    return success(message="Testimonial deleted")


__all__ = ["router"]
