from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt

from dashboard.core import config

ALGORITHM = "HS256"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def is_admin_email(email: str) -> bool:
    """Single-address comparison used by the admin gate. Not real auth."""
    allowed = normalize_email(config.ADMIN_EMAIL)
    return bool(allowed) and normalize_email(email) == allowed


def create_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    expires = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": subject, "exp": expires}
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    # JWTError propagates to the caller
    return jwt.decode(token, config.SECRET_KEY, algorithms=[ALGORITHM])
