"""Bearer-token authentication and role guards."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated, Callable

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models.database_models import Account, Role
from app.models.schemas import CurrentUser


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(
    account_id: str,
    email: str,
    role: Role,
    expires_minutes: int | None = None,
) -> str:
    """Issue a signed access token for an account."""

    settings = get_settings()
    now = datetime.now(timezone.utc)
    lifetime = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    payload = {
        "sub": account_id,
        "email": email,
        "role": Role(role).value,
        "iat": now,
        "exp": now + timedelta(minutes=lifetime),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Resolve the caller from the Authorization header.

    Raises:
        HTTPException: 401 for a missing, invalid or expired token, or when the
            account no longer exists or is inactive
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    settings = get_settings()
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.PyJWTError:
        logger.info("Rejected undecodable bearer token")
        raise _unauthorized("Invalid token")

    if not payload.get("sub") or not payload.get("email") or not payload.get("role"):
        raise _unauthorized("Invalid token payload")

    account = db.query(Account).filter(Account.id == payload["sub"]).first()
    if account is None:
        raise _unauthorized("Account not found")
    if not account.is_active:
        raise _unauthorized("Account is inactive")

    return CurrentUser(sub=account.id, email=account.email, role=account.role)


def require_roles(*roles: Role) -> Callable[..., CurrentUser]:
    """Build a dependency that only admits callers holding one of ``roles``."""

    allowed = set(roles)

    def dependency(user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role for this operation",
            )
        return user

    return dependency
