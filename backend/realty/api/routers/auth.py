# realty/api/routers/auth.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body
from jose import JWTError

from realty.api.dependencies import DbSession, UserContext
from realty.core.errors import ConflictError, ForbiddenError, UnauthorizedError
from realty.core.logging import get_logger
from realty.core.security import (
    create_access_token,
    create_refresh_token,
    subject_user_id,
    verify_password,
    verify_refresh_token,
)
from realty.db import crud_users
from realty.schemas.auth import RefreshRequest, Token
from realty.schemas.user import UserBase, UserCreate, UserLogin

logger = get_logger("realty.auth")

router = APIRouter()


async def _issue_tokens(db, user, message: Optional[str] = None) -> Dict[str, Any]:
    """
    Access + refresh pair; the refresh token is persisted so it can be
    rotated and revoked.
    """
    access = create_access_token(user.id, user.role)
    refresh = create_refresh_token(user.id, user.role)
    await crud_users.save_refresh_token(db, user.id, refresh)
    return Token(
        message=message,
        token=access,
        refresh_token=refresh,
        user=UserBase.model_validate(user),
    ).model_dump(exclude_none=True)


@router.post("/register", status_code=201)
async def register(payload: UserCreate, db: DbSession):
    if await crud_users.get_user_by_email(db, payload.email):
        raise ConflictError("Email already registered")

    user = await crud_users.create_user(
        db,
        full_name=payload.full_name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        role=payload.role or "buyer",
    )
    logger.info("registered user %s (%s)", user.id, user.role)
    return await _issue_tokens(db, user, "User registered successfully")


@router.post("/login")
async def login(payload: UserLogin, db: DbSession):
    user = await crud_users.get_user_by_email(db, payload.email)
    if user is None:
        raise UnauthorizedError("Invalid email or password")
    if not user.is_active:
        raise ForbiddenError("Account is deactivated")
    if not verify_password(payload.password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    return await _issue_tokens(db, user, "Login successful")


@router.get("/me")
async def me(ctx: UserContext):
    return {"user": UserBase.model_validate(ctx.user)}


@router.post("/refresh")
async def refresh(payload: RefreshRequest, db: DbSession):
    """Rotate: the presented refresh token is revoked and a new pair issued."""
    try:
        uid = subject_user_id(verify_refresh_token(payload.refresh_token))
    except JWTError:
        raise UnauthorizedError("Invalid refresh token")

    if not await crud_users.is_refresh_token_live(db, uid, payload.refresh_token):
        raise UnauthorizedError("Refresh token revoked")

    user = await crud_users.get_user(db, uid)
    if user is None or not user.is_active:
        raise UnauthorizedError("Invalid token or user not found")
    return await _issue_tokens(db, user)


@router.post("/logout")
async def logout(db: DbSession, body: Optional[Dict[str, Any]] = Body(None)):
    # body is optional; without a token there is nothing to revoke
    token = (body or {}).get("refresh_token")
    if token:
        await crud_users.revoke_refresh_token(db, token)
    return {"message": "Logged out successfully"}
