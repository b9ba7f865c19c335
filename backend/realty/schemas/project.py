# realty/schemas/project.py
from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from realty.schemas.common import OptionalFloat, OptionalInt, OptionalStr, StrList

ProjectStatus = Literal["upcoming", "ongoing", "completed"]

ARRAY_FIELDS = ("amenities", "highlights", "images", "gallery", "videos")


class ProjectOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    location: str
    city: str
    state: str
    status: str
    total_units: Optional[int] = None
    available_units: Optional[int] = None
    price_range_min: Optional[float] = None
    price_range_max: Optional[float] = None
    amenities: StrList = []
    highlights: StrList = []
    images: StrList = []
    gallery: StrList = []
    videos: StrList = []
    brochure_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    completion_date: Optional[datetime] = None
    possession_date: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProjectUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: OptionalStr = None
    description: OptionalStr = None
    location: OptionalStr = None
    city: OptionalStr = None
    state: OptionalStr = None
    status: Optional[ProjectStatus] = None
    total_units: OptionalInt = Field(None, ge=0)
    available_units: OptionalInt = Field(None, ge=0)
    price_range_min: OptionalFloat = Field(None, ge=0)
    price_range_max: OptionalFloat = Field(None, ge=0)
    amenities: Optional[StrList] = None
    highlights: Optional[StrList] = None
    images: Optional[StrList] = None
    gallery: Optional[StrList] = None
    videos: Optional[StrList] = None
    brochure_url: OptionalStr = None
    latitude: OptionalFloat = None
    longitude: OptionalFloat = None
    completion_date: Optional[datetime] = None
    possession_date: Optional[datetime] = None

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProjectCreate(ProjectUpdate):
    name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    status: ProjectStatus

    def to_row(self) -> Dict[str, Any]:
        row = self.model_dump(exclude_none=True)
        for name in ARRAY_FIELDS:
            row[name] = getattr(self, name) or []
        return row
