# realty/schemas/user.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

# self-registration can never grant admin
SelfServiceRole = Literal["buyer", "seller", "agent"]
UserRole = Literal["buyer", "seller", "agent", "admin"]


class UserBase(BaseModel):
    id: int
    email: EmailStr
    full_name: str
    phone: Optional[str] = None
    role: str

    model_config = {"from_attributes": True}


class UserOut(UserBase):
    """
    Admin-facing user data; includes account state.
    """
    is_active: bool
    created_at: datetime


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    role: Optional[SelfServiceRole] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.lower()


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.lower()


class UserAdminUpdate(BaseModel):
    """
    Admin edits: { "role", "is_active", "full_name", "phone" } (all optional)
    """
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    full_name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
