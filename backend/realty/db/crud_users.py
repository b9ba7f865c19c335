# realty/db/crud_users.py

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from realty.core.security import get_password_hash
from realty.db.models import User, UserRefreshToken


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == email.lower()))
    return res.scalar_one_or_none()


async def list_users(
    db: AsyncSession,
    *,
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[User], int]:
    clauses = []
    if role:
        clauses.append(User.role == role)
    if is_active is not None:
        clauses.append(User.is_active.is_(is_active))

    stmt = select(User).order_by(User.created_at.desc(), User.id.desc())
    count_stmt = select(func.count()).select_from(User)
    if clauses:
        stmt = stmt.where(and_(*clauses))
        count_stmt = count_stmt.where(and_(*clauses))

    res = await db.execute(stmt.offset(offset).limit(limit))
    total = (await db.execute(count_stmt)).scalar_one()
    return list(res.scalars().all()), int(total)


async def create_user(
    db: AsyncSession,
    full_name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    role: str = "buyer",
) -> User:
    """
    Create a user with hashed password. A duplicate email surfaces as an
    IntegrityError from the unique index.
    """
    user = User(
        full_name=full_name,
        email=email.lower(),
        phone=phone,
        password_hash=get_password_hash(password),
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def update_user(db: AsyncSession, user: User, data: Dict[str, Any]) -> User:
    for k, v in data.items():
        if v is not None:
            setattr(user, k, v)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def toggle_user(db: AsyncSession, user: User) -> User:
    user.is_active = not user.is_active
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def deactivate_user(db: AsyncSession, user: User) -> User:
    user.is_active = False
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def save_refresh_token(db: AsyncSession, user_id: int, token: str) -> None:
    """
    Store a new refresh token for the user.
    Simple strategy: revoke existing, then insert new.
    """
    await db.execute(
        update(UserRefreshToken)
        .where(UserRefreshToken.user_id == user_id, UserRefreshToken.revoked.is_(False))
        .values(revoked=True)
    )
    db.add(UserRefreshToken(user_id=user_id, token=token))
    await db.commit()


async def is_refresh_token_live(db: AsyncSession, user_id: int, token: str) -> bool:
    res = await db.execute(
        select(UserRefreshToken.id).where(
            UserRefreshToken.user_id == user_id,
            UserRefreshToken.token == token,
            UserRefreshToken.revoked.is_(False),
        )
    )
    return res.first() is not None


async def revoke_refresh_token(db: AsyncSession, token: str) -> None:
    await db.execute(
        update(UserRefreshToken)
        .where(UserRefreshToken.token == token, UserRefreshToken.revoked.is_(False))
        .values(revoked=True)
    )
    await db.commit()
