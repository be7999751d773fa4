"""
JWT identity utilities

There is no login flow: a Bearer token is optional and, when present, its
user_id takes precedence over any explicit identity in the request.
"""
import jwt
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from . import config

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 24

security = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, expires_delta: timedelta = None) -> str:
    """Create JWT access token"""
    if expires_delta is None:
        expires_delta = timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)

    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "exp": now + expires_delta,
        "iat": now
    }
    return jwt.encode(payload, config.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> dict:
    """Verify JWT token and return payload"""
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("user_id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing user_id",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"user_id": str(user_id)}


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[dict]:
    """Dependency returning the authenticated user, or None when no token is sent"""
    if credentials is None:
        return None
    return verify_token(credentials.credentials)


def resolve_user_id(
    current_user: Optional[dict],
    *candidates: Optional[str],
    fallback: Optional[str] = None
) -> Optional[str]:
    """Pick the acting identity: authenticated user, then explicit candidates in order, then the fallback.

    ``fallback`` defaults to the configured DEFAULT_USER_ID; an empty value there disables it.
    """
    if current_user and current_user.get("user_id"):
        return current_user["user_id"]
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    if fallback is None:
        fallback = config.DEFAULT_USER_ID
    return fallback or None
