# realty/schemas/property.py
from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from realty.schemas.common import OptionalFloat, OptionalInt, OptionalStr, StrList

PropertyType = Literal["land", "plot", "flat", "house", "villa", "apartment", "commercial", "farmland"]
ListingType = Literal["sale", "rent"]

MAX_PRICE = 999999999999999.99
MAX_AREA = 99999999.99

FARMLAND_FIELDS = ("farmland_bigha", "farmland_acre", "price_per_bigha")
PLOT_FIELDS = ("plot_total_area", "plot_length", "plot_width", "number_of_plots")

Views = Annotated[int, BeforeValidator(lambda v: int(v or 0))]


class PropertyOut(BaseModel):
    id: int
    seller_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    locality: str
    city: str
    state: str
    price: float
    property_type: str
    listing_type: Optional[str] = None
    area_sqft: float
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    floors: Optional[int] = None
    parking: Optional[bool] = None
    plot_number: Optional[str] = None
    facing: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_farmland: Optional[bool] = None
    google_earth_link: Optional[str] = None
    amenities: StrList = []
    images: StrList = []
    farmland_bigha: Optional[float] = None
    farmland_acre: Optional[float] = None
    price_per_bigha: Optional[float] = None
    plot_total_area: Optional[float] = None
    plot_length: Optional[float] = None
    plot_width: Optional[float] = None
    number_of_plots: Optional[int] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: str
    views: Views = 0
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class _PropertyFields(BaseModel):
    """Columns a seller may set. Anything else in the body is dropped."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    description: OptionalStr = None
    listing_type: Optional[ListingType] = None
    bedrooms: OptionalInt = Field(None, ge=0)
    bathrooms: OptionalInt = Field(None, ge=0)
    floors: OptionalInt = Field(None, ge=0)
    parking: Optional[bool] = Field(None, validation_alias=AliasChoices("parking", "parking_available"))
    plot_number: OptionalStr = None
    facing: OptionalStr = None
    latitude: OptionalFloat = None
    longitude: OptionalFloat = None
    is_farmland: Optional[bool] = None
    google_earth_link: OptionalStr = None
    amenities: Optional[StrList] = None
    images: Optional[StrList] = None
    farmland_bigha: OptionalFloat = Field(None, ge=0)
    farmland_acre: OptionalFloat = Field(None, ge=0)
    price_per_bigha: OptionalFloat = Field(None, ge=0)
    plot_total_area: OptionalFloat = Field(None, ge=0)
    plot_length: OptionalFloat = Field(None, ge=0)
    plot_width: OptionalFloat = Field(None, ge=0)
    number_of_plots: OptionalInt = Field(None, ge=0)
    full_name: OptionalStr = None
    email: OptionalStr = None
    phone: OptionalStr = None

    def _prune_type_specific(self, row: Dict[str, Any], property_type: Optional[str]) -> Dict[str, Any]:
        if property_type is None:
            return row
        if property_type != "farmland":
            for name in FARMLAND_FIELDS:
                row.pop(name, None)
        if property_type != "plot":
            for name in PLOT_FIELDS:
                row.pop(name, None)
        return row


class PropertyCreate(_PropertyFields):
    title: str = Field(..., min_length=1)
    locality: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    property_type: PropertyType
    price: OptionalFloat = None
    area_sqft: OptionalFloat = None

    @field_validator("title", "locality", "city", "state", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_price_and_area(self) -> "PropertyCreate":
        if self.property_type == "farmland":
            if self.price is not None:
                if self.price < 0:
                    raise ValueError("Invalid price. Please enter a valid positive number if provided.")
            elif self.price_per_bigha and self.farmland_bigha:
                self.price = self.price_per_bigha * self.farmland_bigha
            else:
                # column is NOT NULL
                self.price = 0.0
        elif self.price is None or self.price <= 0:
            raise ValueError("Invalid price. Please enter a valid positive number.")
        if self.price > MAX_PRICE:
            raise ValueError(f"Price exceeds maximum allowed value ({MAX_PRICE:,.2f}).")

        if self.property_type in ("plot", "farmland"):
            if self.area_sqft is None:
                self.area_sqft = 0.0
            elif self.area_sqft < 0:
                raise ValueError("Invalid area. Please enter a valid positive number if provided.")
        elif self.area_sqft is None or self.area_sqft <= 0:
            raise ValueError("Invalid area. Please enter a valid positive number.")
        if self.area_sqft > MAX_AREA:
            raise ValueError(f"Area exceeds maximum allowed value ({MAX_AREA:,.2f} sqft).")
        return self

    def to_row(self) -> Dict[str, Any]:
        row = self.model_dump(exclude_none=True)
        row["amenities"] = self.amenities or []
        row["images"] = self.images or []
        return self._prune_type_specific(row, self.property_type)


class PropertyUpdate(_PropertyFields):
    title: OptionalStr = None
    locality: OptionalStr = None
    city: OptionalStr = None
    state: OptionalStr = None
    property_type: Optional[PropertyType] = None
    price: OptionalFloat = Field(None, ge=0, le=MAX_PRICE)
    area_sqft: OptionalFloat = Field(None, ge=0, le=MAX_AREA)

    def to_row(self) -> Dict[str, Any]:
        row = self.model_dump(exclude_unset=True, exclude_none=True)
        return self._prune_type_specific(row, self.property_type)


class PropertyStatusUpdate(BaseModel):
    status: Optional[Literal["pending", "approved", "rejected"]] = None
    is_active: Optional[bool] = None
