# realty/api/dependencies.py
import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from realty.core.errors import ForbiddenError, UnauthorizedError
from realty.core.security import subject_user_id, verify_access_token
from realty.db.models import User
from realty.db.session import get_db

logger = logging.getLogger("realty.auth")
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Who is calling. Passed explicitly into handlers and services."""

    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user is not None else None

    def can_manage(self, owner_id: Optional[int]) -> bool:
        """Owner or admin."""
        return self.is_admin or (self.user is not None and owner_id == self.user.id)


async def _user_from_token(db: AsyncSession, token: str) -> User:
    try:
        payload = verify_access_token(token)
        uid = subject_user_id(payload)
    except ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except JWTError:
        logger.debug("token decode error", exc_info=True)
        raise UnauthorizedError("Invalid token")

    res = await db.execute(select(User).where(User.id == uid, User.is_active.is_(True)))
    user = res.scalar_one_or_none()
    if user is None:
        raise UnauthorizedError("Invalid token or user not found")
    return user


async def get_context(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> RequestContext:
    """
    Optional auth: a missing or bad token just means an anonymous caller.
    """
    if credentials is None:
        return RequestContext()
    try:
        user = await _user_from_token(db, credentials.credentials)
    except UnauthorizedError:
        return RequestContext()
    return RequestContext(user=user)


async def require_user(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> RequestContext:
    if credentials is None:
        raise UnauthorizedError("Access token required")
    user = await _user_from_token(db, credentials.credentials)
    return RequestContext(user=user)


def require_role(role: str):
    """
    Dependency factory:
      ctx = Depends(require_role("admin"))
    Admins pass every role check.
    """

    async def dep(ctx: RequestContext = Depends(require_user)) -> RequestContext:
        if ctx.user.role != role and not ctx.is_admin:
            raise ForbiddenError("Admin access required" if role == "admin" else "Insufficient permissions")
        return ctx

    return dep


require_admin = require_role("admin")

OptionalContext = Annotated[RequestContext, Depends(get_context)]
UserContext = Annotated[RequestContext, Depends(require_user)]
AdminContext = Annotated[RequestContext, Depends(require_admin)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
