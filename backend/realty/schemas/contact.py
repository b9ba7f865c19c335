# realty/schemas/contact.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class ContactCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

    @field_validator("full_name", "subject", "message", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.lower()


class ContactOut(BaseModel):
    id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    is_read: bool
    is_responded: bool
    created_at: datetime

    model_config = {"from_attributes": True}
