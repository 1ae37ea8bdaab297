"""Bearer session tokens for profiles.

令牌只携带 profile ID（sub）与过期时间（exp）。列表接口对匿名访客开放，
因此提供严格与宽松两种依赖。
"""

from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger
from pydantic import BaseModel, Field
from pydantic import ValidationError as PayloadError

from src.core.config import settings

required_bearer = HTTPBearer()
optional_bearer = HTTPBearer(auto_error=False)


class TokenPayload(BaseModel):
    sub: str = Field(..., min_length=1, description="Profile ID")
    exp: int = Field(..., gt=0, description="过期时间戳（秒）")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(profile_id: str, expires_delta: timedelta | None = None) -> str:
    """Sign a session token for ``profile_id``."""
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": profile_id, "exp": datetime.now(UTC) + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> TokenPayload:
    """Verify signature and expiry; any failure is a 401."""
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise _unauthorized("Invalid token")

    try:
        return TokenPayload.model_validate(claims)
    except PayloadError:
        raise _unauthorized("Invalid token payload")


async def get_current_profile_id(
    credentials: HTTPAuthorizationCredentials = Depends(required_bearer),
) -> str:
    return decode_token(credentials.credentials).sub


async def get_optional_profile_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
) -> str | None:
    """Profile ID for a signed-in visitor; anonymous or broken sessions get None."""
    if credentials is None:
        return None
    try:
        return decode_token(credentials.credentials).sub
    except HTTPException:
        return None
