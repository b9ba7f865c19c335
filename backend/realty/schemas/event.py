# realty/schemas/event.py
import re
from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from realty.schemas.common import OptionalFloat, OptionalInt, OptionalStr, StrList

EventType = Literal["builder_meetup", "dealer_meetup", "inauguration"]

_TIME_RE = re.compile(r"^\d{1,2}:\d{2}")


class EventOut(BaseModel):
    id: int
    title: str
    event_type: str
    related_project_id: Optional[int] = None
    description: Optional[str] = None
    location: str
    city: str
    event_date: datetime
    event_time: Optional[str] = None
    agenda: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    rsvp_info: Optional[str] = None
    map_location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    banner_image: Optional[str] = None
    registration_link: Optional[str] = None
    max_attendees: Optional[int] = None
    images: StrList = []
    videos: StrList = []
    is_past: bool
    registered_count: int = 0
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class EventUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: OptionalStr = None
    event_type: Optional[EventType] = None
    related_project_id: OptionalInt = None
    description: OptionalStr = None
    location: OptionalStr = None
    city: OptionalStr = None
    event_date: Optional[datetime] = None
    event_time: OptionalStr = None
    agenda: OptionalStr = None
    contact_person: OptionalStr = None
    contact_email: OptionalStr = None
    contact_phone: OptionalStr = None
    rsvp_info: OptionalStr = None
    map_location: OptionalStr = None
    latitude: OptionalFloat = None
    longitude: OptionalFloat = None
    banner_image: OptionalStr = None
    registration_link: OptionalStr = None
    max_attendees: OptionalInt = Field(None, ge=1)
    images: Optional[StrList] = None
    videos: Optional[StrList] = None

    @field_validator("event_time")
    @classmethod
    def _check_time(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not _TIME_RE.match(value):
            raise ValueError("event_time must look like HH:MM")
        return value

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class EventCreate(EventUpdate):
    title: str = Field(..., min_length=1)
    event_type: EventType = "builder_meetup"
    location: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    event_date: datetime

    def to_row(self) -> Dict[str, Any]:
        row = self.model_dump(exclude_none=True)
        row["images"] = self.images or []
        row["videos"] = self.videos or []
        return row


class EventRegistrationCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
