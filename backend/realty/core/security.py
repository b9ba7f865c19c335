# realty/core/security.py
"""Password hashing and the access/refresh JWT pair."""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt, JWTError
from passlib.context import CryptContext

from realty.core.config import settings

ACCESS = "access"
REFRESH = "refresh"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# --------------------------------------
# Tokens
# --------------------------------------

def _secret_for(token_type: str) -> str:
    return settings.JWT_REFRESH_SECRET_KEY if token_type == REFRESH else settings.JWT_SECRET_KEY


def _mint(user_id: int, role: str, token_type: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        # jose requires "sub" to be a string
        "sub": str(user_id),
        "role": role,
        "type": token_type,
        "iat": now,
        "exp": now + lifetime,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, _secret_for(token_type), algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: int, role: str) -> str:
    return _mint(user_id, role, ACCESS, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(user_id: int, role: str) -> str:
    return _mint(user_id, role, REFRESH, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def _verify(token: str, token_type: str) -> Dict[str, Any]:
    """Raises JWTError (ExpiredSignatureError for expired tokens)."""
    payload = jwt.decode(token, _secret_for(token_type), algorithms=[settings.JWT_ALGORITHM])
    if payload.get("type") != token_type:
        raise JWTError("Invalid token type")
    if not payload.get("sub"):
        raise JWTError("Missing subject in token")
    return payload


def verify_access_token(token: str) -> Dict[str, Any]:
    return _verify(token, ACCESS)


def verify_refresh_token(token: str) -> Dict[str, Any]:
    return _verify(token, REFRESH)


def subject_user_id(payload: Dict[str, Any]) -> int:
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise JWTError("Invalid user id in token")
