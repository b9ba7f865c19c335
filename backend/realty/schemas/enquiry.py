# realty/schemas/enquiry.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class EnquiryCreate(BaseModel):
    property_id: int
    message: str = Field(..., min_length=1)


class EnquiryOut(BaseModel):
    id: int
    property_id: int
    buyer_id: int
    seller_id: int
    message: str
    is_read: bool
    created_at: datetime
    property_title: Optional[str] = None
    locality: Optional[str] = None
    city: Optional[str] = None
    buyer_name: Optional[str] = None
    buyer_email: Optional[str] = None
    buyer_phone: Optional[str] = None

    model_config = {"from_attributes": True}
