"""
Security utilities: JWT tokens and the acting-user dependency
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import logging

from comtrans.core.config import settings

logger = logging.getLogger(__name__)

security_scheme = HTTPBearer()


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller of the API"""
    id: int
    is_admin: bool = False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security_scheme)
) -> CurrentUser:
    """
    FastAPI dependency resolving the bearer token to the acting user.

    The token subject is the numeric user id; a "role" claim of "admin"
    grants administrator access to every locale.

    Raises:
        HTTPException: If token is invalid or has no usable subject
    """
    payload = decode_access_token(credentials.credentials)

    if not payload:
        logger.warning("Invalid or expired token")
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        logger.warning(f"Token with unusable subject: {payload.get('sub')}")
        raise HTTPException(
            status_code=401,
            detail="Invalid token subject",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentUser(id=user_id, is_admin=payload.get("role") == "admin")
