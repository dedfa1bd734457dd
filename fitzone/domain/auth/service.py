"""Auth service - Registration, login and password management"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import FRONTEND_URL, PASSWORD_RESET_MAX_AGE
from ...models import User
from ...security_utils import (
    create_access_token,
    generate_password_reset_token,
    hash_password,
    password_fingerprint,
    verify_password,
    verify_password_reset_token,
)
from .repository import UserRepository
from .schemas import (
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
)

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def register(self, data: RegisterRequest) -> tuple[User, str]:
        """Create a member account and return it with a fresh token"""
        if self.repo.get_by_email(self.db, data.email):
            raise HTTPException(status_code=400, detail="User already exists with this email")

        user = self.repo.create_member_account(
            self.db,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            password_hash=hash_password(data.password),
            role="member",
        )
        logger.info(f"🆕 Registered new member: {user.email} (id={user.id})")
        return user, create_access_token(user.id, user.role)

    def login(self, data: LoginRequest) -> tuple[User, str]:
        user = self.repo.get_by_email(self.db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.warning(f"⚠️ Failed login for {data.email}")
            raise HTTPException(status_code=401, detail="Invalid email or password")

        if not user.is_active:
            raise HTTPException(
                status_code=401,
                detail="Your account has been deactivated. Please contact support.",
            )

        return user, create_access_token(user.id, user.role)

    def update_details(self, user: User, data: UpdateDetailsRequest) -> User:
        if data.email and data.email != user.email:
            existing = self.repo.get_by_email(self.db, data.email)
            if existing and existing.id != user.id:
                raise HTTPException(status_code=400, detail="Email is already in use")

        return self.repo.update(
            self.db,
            user,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            avatar=data.avatar,
        )

    def update_password(self, user: User, data: UpdatePasswordRequest) -> tuple[User, str]:
        if not verify_password(data.current_password, user.password_hash):
            raise HTTPException(status_code=401, detail="Current password is incorrect")

        user = self.repo.update(self.db, user, password_hash=hash_password(data.new_password))
        logger.info(f"🔑 Password changed for user {user.id}")
        return user, create_access_token(user.id, user.role)

    def create_reset_link(self, email: str) -> tuple[User, str]:
        """Return the user and the password reset link to email them"""
        user = self.repo.get_by_email(self.db, email)
        if not user:
            raise HTTPException(status_code=404, detail="There is no user with that email")

        token = generate_password_reset_token(user.id, user.password_hash)
        return user, f"{FRONTEND_URL}/reset-password/{token}"

    def reset_password(self, data: ResetPasswordRequest) -> tuple[User, str]:
        payload = verify_password_reset_token(data.token, PASSWORD_RESET_MAX_AGE)
        user = self.repo.get_by_id(self.db, payload["id"]) if payload else None

        # The fingerprint ties the token to the password it was issued against
        if not user or payload.get("fp") != password_fingerprint(user.password_hash):
            raise HTTPException(status_code=400, detail="Invalid or expired reset token")

        user = self.repo.update(self.db, user, password_hash=hash_password(data.password))
        logger.info(f"🔑 Password reset completed for user {user.id}")
        return user, create_access_token(user.id, user.role)
