# realty/schemas/investment.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from realty.schemas.common import OptionalFloat, OptionalInt, OptionalStr, StrList


class OpportunityOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    location: str
    city: str
    state: str
    investment_type: str
    min_investment: float
    expected_roi: Optional[float] = None
    investment_period: Optional[str] = None
    highlights: StrList = []
    risk_level: Optional[str] = None
    images: StrList = []
    documents: StrList = []
    investors_count: int = 0
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class OpportunityCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1)
    description: OptionalStr = None
    location: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    investment_type: str = Field(..., min_length=1)
    min_investment: float = Field(..., ge=0)
    expected_roi: OptionalFloat = None
    investment_period: OptionalStr = None
    highlights: Optional[StrList] = None
    risk_level: OptionalStr = None
    images: Optional[StrList] = None
    documents: Optional[StrList] = None

    def to_row(self) -> Dict[str, Any]:
        row = self.model_dump(exclude_none=True)
        for name in ("highlights", "images", "documents"):
            row[name] = getattr(self, name) or []
        return row


class InvestorRegistrationCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    opportunity_id: OptionalInt = None
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    investment_budget: OptionalFloat = Field(None, ge=0)
    preferred_investment_type: OptionalStr = None
    message: OptionalStr = None


class InvestorRegistrationOut(BaseModel):
    id: int
    opportunity_id: Optional[int] = None
    opportunity_title: Optional[str] = None
    user_id: Optional[int] = None
    full_name: str
    email: str
    phone: str
    investment_budget: Optional[float] = None
    preferred_investment_type: Optional[str] = None
    message: Optional[str] = None
    is_contacted: bool
    created_at: datetime

    model_config = {"from_attributes": True}
