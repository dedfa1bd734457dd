"""
Security Utilities
Password hashing, JWT access tokens, timed reset tokens and signature checks
"""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta
from typing import Any, Optional

# Input sanitization
import bleach

# Token generation and validation
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from jose import JWTError
from jose import jwt as jose_jwt

# Password hashing
from passlib.context import CryptContext

from .config import JWT_EXPIRE_DAYS, SECRET_KEY

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
PASSWORD_RESET_SALT = "password-reset"

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# TOKEN GENERATION & VALIDATION
# ============================================================================


def generate_secure_hex(nbytes: int = 32) -> str:
    """Random hex token (64 chars for the default 32 bytes)"""
    return secrets.token_hex(nbytes)


def create_access_token(user_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT for API access

    Args:
        user_id: Database id of the user
        role: member, trainer or admin
        expires_delta: Token lifetime (default JWT_EXPIRE_DAYS)
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(days=JWT_EXPIRE_DAYS))
    to_encode = {"id": user_id, "role": role, "exp": expire}
    return jose_jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> Optional[dict[str, Any]]:
    """
    Verify and decode a JWT token

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jose_jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def generate_password_reset_token(user_id: int, password_hash: str) -> str:
    """
    Time-limited reset token. A fingerprint of the current hash is embedded so
    the token stops working once the password has been changed.
    """
    serializer = URLSafeTimedSerializer(SECRET_KEY)
    return serializer.dumps(
        {"id": user_id, "fp": password_fingerprint(password_hash)}, salt=PASSWORD_RESET_SALT
    )


def verify_password_reset_token(token: str, max_age: int) -> Optional[dict[str, Any]]:
    """
    Verify and decode a password reset token

    Returns:
        Decoded data if valid, None if invalid or expired
    """
    serializer = URLSafeTimedSerializer(SECRET_KEY)
    try:
        return serializer.loads(token, salt=PASSWORD_RESET_SALT, max_age=max_age)
    except SignatureExpired:
        logger.warning("Password reset token expired")
        return None
    except BadSignature:
        logger.warning("Invalid password reset token signature")
        return None


def password_fingerprint(password_hash: str) -> str:
    return hashlib.sha256(password_hash.encode()).hexdigest()[:16]


# ============================================================================
# SIGNATURES
# ============================================================================


def compute_hmac_sha256(payload: str, secret: str) -> str:
    """Hex HMAC-SHA256 of payload with secret"""
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def constant_time_compare(a: str, b: str) -> bool:
    """Compare two strings in constant time to prevent timing attacks"""
    return hmac.compare_digest(a.encode(), b.encode())


# ============================================================================
# INPUT SANITIZATION
# ============================================================================


def sanitize_text(text: Optional[str]) -> str:
    """Strip all markup from free text (chat messages, reviews)"""
    if not text:
        return ""
    return bleach.clean(text, tags=[], attributes={}, strip=True).strip()


def mask_sensitive_data(data: str, visible_chars: int = 4) -> str:
    """Mask sensitive data for logging"""
    if len(data) <= visible_chars:
        return "*" * len(data)

    return "*" * (len(data) - visible_chars) + data[-visible_chars:]
