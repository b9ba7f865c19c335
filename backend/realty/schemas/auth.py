# realty/schemas/auth.py
from typing import Optional

from pydantic import BaseModel

from realty.schemas.user import UserBase


class Token(BaseModel):
    message: Optional[str] = None
    token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Optional[UserBase] = None

    model_config = {"from_attributes": True}


class RefreshRequest(BaseModel):
    refresh_token: str
