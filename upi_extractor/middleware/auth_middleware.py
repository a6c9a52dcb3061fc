from typing import Optional

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from upi_extractor.db_config import get_db
from upi_extractor.middleware.api_key_middleware import (
    API_KEY_HEADER,
    INVALID_KEY_MESSAGE,
    MISSING_KEY_MESSAGE,
)
from upi_extractor.models.models import User
from upi_extractor.repositories import UserRepository
from upi_extractor.services.rate_limit_service import RateLimiter, get_rate_limiter
from upi_extractor.utils.exceptions import AuthenticationError, AuthorizationError


api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def authenticate_user(
    api_key: Optional[str] = Security(api_key_header),
    db: Session = Depends(get_db)
) -> User:
    if not api_key:
        raise AuthenticationError(MISSING_KEY_MESSAGE)

    user = UserRepository(db).get_by_api_key(api_key)
    if user is None:
        raise AuthenticationError(INVALID_KEY_MESSAGE)
    return user


def require_admin(
    user: User = Depends(authenticate_user),
    db: Session = Depends(get_db)
) -> User:
    # Re-read so a revoked admin flag takes effect immediately
    current = UserRepository(db).get_by_id(user.id)
    if current is None or not current.is_admin:
        raise AuthorizationError("Forbidden: Admin access required")
    return current


def rate_limited_user(
    user: User = Depends(authenticate_user),
    limiter: RateLimiter = Depends(get_rate_limiter)
) -> User:
    if not user.is_admin:
        limiter.hit(f"user:{user.id}")
    return user
