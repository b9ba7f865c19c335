# realty/schemas/rental.py
from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from realty.schemas.common import OptionalFloat, OptionalInt, OptionalStr, StrList

RentType = Literal["unfurnished", "semi-furnished", "furnished"]
TenantType = Literal["any", "family", "bachelor", "company"]


class RentalOut(BaseModel):
    id: int
    owner_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    locality: str
    city: str
    state: str
    monthly_rent: float
    security_deposit: Optional[float] = None
    property_type: str
    area_sqft: float
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    rent_type: Optional[str] = None
    tenant_type: Optional[str] = None
    available_from: Optional[datetime] = None
    amenities: StrList = []
    images: StrList = []
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: str
    is_active: bool
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RentalUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: OptionalStr = None
    description: OptionalStr = None
    locality: OptionalStr = None
    city: OptionalStr = None
    state: OptionalStr = None
    monthly_rent: OptionalFloat = Field(None, gt=0)
    security_deposit: OptionalFloat = Field(None, ge=0)
    property_type: OptionalStr = None
    area_sqft: OptionalFloat = Field(None, gt=0)
    bedrooms: OptionalInt = Field(None, ge=0)
    bathrooms: OptionalInt = Field(None, ge=0)
    rent_type: Optional[RentType] = None
    tenant_type: Optional[TenantType] = None
    available_from: Optional[datetime] = None
    amenities: Optional[StrList] = None
    images: Optional[StrList] = None
    latitude: OptionalFloat = None
    longitude: OptionalFloat = None
    full_name: OptionalStr = None
    email: OptionalStr = None
    phone: OptionalStr = None

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class RentalCreate(RentalUpdate):
    title: str = Field(..., min_length=1)
    locality: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    monthly_rent: float = Field(..., gt=0)
    property_type: str = Field(..., min_length=1)
    area_sqft: float = Field(..., gt=0)

    def to_row(self) -> Dict[str, Any]:
        row = self.model_dump(exclude_none=True)
        row["amenities"] = self.amenities or []
        row["images"] = self.images or []
        return row
