import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import User
from .security_utils import verify_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _resolve_user(token: str, db: Session) -> User:
    payload = verify_access_token(token)
    if not payload or "id" not in payload:
        raise HTTPException(status_code=401, detail="Not authorized, token failed")

    user = db.query(User).filter(User.id == payload["id"]).first()
    if not user:
        logger.warning(f"⚠️ Token references missing user id={payload['id']}")
        raise HTTPException(status_code=401, detail="Not authorized, user not found")

    if not user.is_active:
        raise HTTPException(
            status_code=401,
            detail="Your account has been deactivated. Please contact support.",
        )
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer JWT"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authorized, no token",
        )

    user = _resolve_user(credentials.credentials, db)
    logger.debug(f"✅ User authenticated: {user.email}")
    return user


def require_roles(*roles: str):
    """
    Build a dependency that only admits users with one of the given roles

    Example:
        admin_required = require_roles("admin")

        @router.delete("/{id}")
        async def delete_thing(user: User = Depends(admin_required)):
            ...
    """

    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(f"⚠️ User {user.email} ({user.role}) denied; requires {roles}")
            raise HTTPException(
                status_code=403,
                detail=f"User role '{user.role}' is not authorized to access this route",
            )
        return user

    return role_checker


admin_required = require_roles("admin")
trainer_required = require_roles("trainer", "admin")
