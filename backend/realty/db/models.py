# realty/db/models.py

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    ForeignKey,
    Numeric,
    Boolean,
    JSON,
)
from sqlalchemy.orm import relationship

from realty.db.base import Base, utcnow

# Moderation statuses for properties and rentals
STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
MODERATION_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)

ROLE_ADMIN = "admin"
USER_ROLES = ("buyer", "seller", "agent", ROLE_ADMIN)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)

    role = Column(String(20), nullable=False, default="buyer", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    properties = relationship(
        "Property",
        back_populates="seller",
        passive_deletes=True,
    )

    refresh_tokens = relationship(
        "UserRefreshToken",
        back_populates="user",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class UserRefreshToken(Base):
    __tablename__ = "user_refresh_tokens"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    revoked = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="refresh_tokens")


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)

    # listing survives its seller
    seller_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    locality = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(15, 2), nullable=False, index=True)
    property_type = Column(String(50), nullable=False, index=True)
    listing_type = Column(String(20), nullable=False, default="sale")
    area_sqft = Column(Numeric(10, 2), nullable=False)
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    floors = Column(Integer, nullable=True)
    parking = Column(Boolean, nullable=True)
    plot_number = Column(String(50), nullable=True)
    facing = Column(String(20), nullable=True)
    latitude = Column(Numeric(10, 8), nullable=True)
    longitude = Column(Numeric(11, 8), nullable=True)
    is_farmland = Column(Boolean, nullable=False, default=False)
    google_earth_link = Column(Text, nullable=True)

    # list[str] as JSON in DB
    amenities = Column(JSON, nullable=True, default=list)
    images = Column(JSON, nullable=True, default=list)

    # farmland
    farmland_bigha = Column(Numeric(10, 2), nullable=True)
    farmland_acre = Column(Numeric(10, 2), nullable=True)
    price_per_bigha = Column(Numeric(15, 2), nullable=True)

    # plot
    plot_total_area = Column(Numeric(10, 2), nullable=True)
    plot_length = Column(Numeric(10, 2), nullable=True)
    plot_width = Column(Numeric(10, 2), nullable=True)
    number_of_plots = Column(Integer, nullable=True)

    # seller contact captured on the listing form
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)

    # "pending" | "approved" | "rejected"
    status = Column(String(20), nullable=False, default=STATUS_PENDING, index=True)
    views = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    seller = relationship("User", back_populates="properties")

    image_rows = relationship(
        "PropertyImage",
        back_populates="property",
        cascade="all,delete-orphan",
        passive_deletes=True,
        order_by="PropertyImage.display_order",
    )


class PropertyImage(Base):
    __tablename__ = "property_images"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    image_url = Column(Text, nullable=False)
    display_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    property = relationship("Property", back_populates="image_rows")


class RentalProperty(Base):
    __tablename__ = "rental_properties"

    id = Column(Integer, primary_key=True, index=True)

    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    locality = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(100), nullable=False)
    monthly_rent = Column(Numeric(10, 2), nullable=False, index=True)
    security_deposit = Column(Numeric(10, 2), nullable=True)
    property_type = Column(String(50), nullable=False)
    area_sqft = Column(Numeric(10, 2), nullable=False)
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    rent_type = Column(String(20), nullable=False, default="unfurnished")
    tenant_type = Column(String(20), nullable=False, default="any")
    available_from = Column(DateTime, nullable=True)
    amenities = Column(JSON, nullable=True, default=list)
    images = Column(JSON, nullable=True, default=list)
    latitude = Column(Numeric(10, 8), nullable=True)
    longitude = Column(Numeric(11, 8), nullable=True)

    status = Column(String(20), nullable=False, default=STATUS_PENDING, index=True)
    is_active = Column(Boolean, nullable=False, default=False)

    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(100), nullable=False)
    # construction status: upcoming | ongoing | completed
    status = Column(String(20), nullable=False, index=True)
    total_units = Column(Integer, nullable=True)
    available_units = Column(Integer, nullable=True)
    price_range_min = Column(Numeric(15, 2), nullable=True)
    price_range_max = Column(Numeric(15, 2), nullable=True)
    amenities = Column(JSON, nullable=True, default=list)
    highlights = Column(JSON, nullable=True, default=list)
    images = Column(JSON, nullable=True, default=list)
    gallery = Column(JSON, nullable=True, default=list)
    videos = Column(JSON, nullable=True, default=list)
    brochure_url = Column(Text, nullable=True)
    latitude = Column(Numeric(10, 8), nullable=True)
    longitude = Column(Numeric(11, 8), nullable=True)
    completion_date = Column(DateTime, nullable=True)
    possession_date = Column(DateTime, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    # builder_meetup | dealer_meetup | inauguration
    event_type = Column(String(50), nullable=False, default="builder_meetup", index=True)
    related_project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    )
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    event_date = Column(DateTime, nullable=False, index=True)
    event_time = Column(String(20), nullable=True)
    agenda = Column(Text, nullable=True)
    contact_person = Column(String(255), nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(20), nullable=True)
    rsvp_info = Column(Text, nullable=True)
    map_location = Column(Text, nullable=True)
    latitude = Column(Numeric(10, 8), nullable=True)
    longitude = Column(Numeric(11, 8), nullable=True)
    banner_image = Column(String(500), nullable=True)
    registration_link = Column(Text, nullable=True)
    max_attendees = Column(Integer, nullable=True)
    images = Column(JSON, nullable=True, default=list)
    videos = Column(JSON, nullable=True, default=list)
    is_past = Column(Boolean, nullable=False, default=False, index=True)
    registered_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    registrations = relationship(
        "EventRegistration",
        back_populates="event",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(
        Integer,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    event = relationship("Event", back_populates="registrations")


class InvestmentOpportunity(Base):
    __tablename__ = "investment_opportunities"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(100), nullable=False)
    investment_type = Column(String(100), nullable=False, index=True)
    min_investment = Column(Numeric(15, 2), nullable=False)
    expected_roi = Column(Numeric(5, 2), nullable=True)
    investment_period = Column(String(100), nullable=True)
    highlights = Column(JSON, nullable=True, default=list)
    risk_level = Column(String(20), nullable=True)
    images = Column(JSON, nullable=True, default=list)
    documents = Column(JSON, nullable=True, default=list)
    investors_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class InvestorRegistration(Base):
    __tablename__ = "investor_registrations"

    id = Column(Integer, primary_key=True, index=True)
    opportunity_id = Column(
        Integer,
        ForeignKey("investment_opportunities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    investment_budget = Column(Numeric(15, 2), nullable=True)
    preferred_investment_type = Column(String(100), nullable=True)
    message = Column(Text, nullable=True)
    is_contacted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    opportunity = relationship("InvestmentOpportunity")


class ContactSubmission(Base):
    __tablename__ = "contact_submissions"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    is_responded = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)


class Enquiry(Base):
    __tablename__ = "enquiries"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    buyer_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seller_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
