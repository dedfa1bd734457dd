"""Auth router - account endpoints"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...email_service import deliver, send_password_reset_email, send_welcome_email
from ...models import User
from ...rate_limiter import create_rate_limiter
from ...shared.responses import success
from .schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
    UserResponse,
)
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

login_limiter = create_rate_limiter(limit=10, window_seconds=900, key_prefix="login")
register_limiter = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="register")
reset_limiter = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="password_reset")


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


def _with_token(user: User, token: str) -> dict:
    return {**UserResponse.from_user(user).model_dump(), "token": token}


@router.post("/register", status_code=201)
async def register(
    data: RegisterRequest,
    _: None = Depends(register_limiter),
    service: AuthService = Depends(get_auth_service),
):
    user, token = service.register(data)
    await deliver(send_welcome_email(user.email, user.full_name))
    return success(_with_token(user, token))


@router.post("/login")
async def login(
    data: LoginRequest,
    _: None = Depends(login_limiter),
    service: AuthService = Depends(get_auth_service),
):
    user, token = service.login(data)
    return success(_with_token(user, token))


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    return success(UserResponse.from_user(current_user))


@router.put("/updatedetails")
async def update_details(
    data: UpdateDetailsRequest,
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    user = service.update_details(current_user, data)
    return success(UserResponse.from_user(user))


@router.put("/updatepassword")
async def update_password(
    data: UpdatePasswordRequest,
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    user, token = service.update_password(current_user, data)
    return success(_with_token(user, token), message="Password updated successfully")


@router.post("/forgotpassword")
async def forgot_password(
    data: ForgotPasswordRequest,
    _: None = Depends(reset_limiter),
    service: AuthService = Depends(get_auth_service),
):
    user, reset_link = service.create_reset_link(data.email)
    await deliver(send_password_reset_email(user.email, reset_link))
    return success(message="Password reset email sent")


@router.post("/resetpassword")
async def reset_password(
    data: ResetPasswordRequest,
    service: AuthService = Depends(get_auth_service),
):
    user, token = service.reset_password(data)
    return success(_with_token(user, token), message="Password reset successful")


__all__ = ["router"]
