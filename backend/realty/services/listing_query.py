# realty/services/listing_query.py
"""
Filtered, paginated listing queries shared by every listing kind.

A query is described by an immutable ``ListingFilters`` value. The same value
is turned into one predicate that feeds both the page fetch and the COUNT, so
``total`` always describes the rows the pages are cut from.
"""
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from realty.core.config import settings
from realty.db.models import (
    Event,
    InvestmentOpportunity,
    Project,
    Property,
    PropertyImage,
    RentalProperty,
)
from realty.schemas.event import EventOut
from realty.schemas.investment import OpportunityOut
from realty.schemas.project import ProjectOut
from realty.schemas.property import PropertyOut
from realty.schemas.rental import RentalOut


# --------------------------------------
# Lenient query-string parsing
# --------------------------------------

def parse_float(value: Any) -> Optional[float]:
    """Return a finite float, or None for anything unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_int(value: Any) -> Optional[int]:
    number = parse_float(value)
    if number is None:
        return None
    return int(number)


def parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
    return None


def clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


# --------------------------------------
# Value types
# --------------------------------------

@dataclass(frozen=True)
class ListingFilters:
    city: Optional[str] = None
    state: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_area: Optional[float] = None
    max_area: Optional[float] = None
    min_bedrooms: Optional[int] = None
    status: Optional[str] = None
    is_active: Optional[bool] = None
    owner_id: Optional[int] = None
    search: Optional[str] = None
    # exact matches on kind-specific columns, e.g. (("rent_type", "furnished"),)
    attributes: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def from_params(cls, **params: Any) -> "ListingFilters":
        """
        Build filters from raw query-string values. Malformed numbers are
        dropped, never raised.
        """
        attributes = tuple(
            (name, value)
            for name, value in (params.get("attributes") or {}).items()
            if value is not None and value != ""
        )
        return cls(
            city=clean_str(params.get("city")),
            state=clean_str(params.get("state")),
            category=clean_str(params.get("category")),
            min_price=parse_float(params.get("min_price")),
            max_price=parse_float(params.get("max_price")),
            min_area=parse_float(params.get("min_area")),
            max_area=parse_float(params.get("max_area")),
            min_bedrooms=parse_int(params.get("min_bedrooms")),
            status=clean_str(params.get("status")),
            search=clean_str(params.get("search")),
            owner_id=parse_int(params.get("owner_id")),
            attributes=attributes,
        )


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 20

    @classmethod
    def from_params(cls, page: Any = None, limit: Any = None, default_limit: Optional[int] = None) -> "PageRequest":
        default_limit = default_limit or settings.DEFAULT_PAGE_SIZE
        page_num = parse_int(page)
        limit_num = parse_int(limit)
        if page_num is None or page_num < 1:
            page_num = 1
        if limit_num is None or limit_num < 1:
            limit_num = default_limit
        return cls(page=page_num, limit=min(limit_num, settings.MAX_PAGE_SIZE))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "pages": self.pages,
        }


@dataclass
class ListingPage:
    items: List[Dict[str, Any]]
    pagination: Pagination

    def to_dict(self, key: str = "items") -> Dict[str, Any]:
        return {key: self.items, "pagination": self.pagination.to_dict()}


@dataclass(frozen=True)
class ListingKind:
    """Maps the generic filter fields onto one listing table."""

    name: str
    plural: str
    model: Any
    formatter: Callable[[Any], Dict[str, Any]]
    price_column: Optional[str] = None
    area_column: Optional[str] = None
    category_column: Optional[str] = None
    bedrooms_column: Optional[str] = None
    owner_column: Optional[str] = None
    moderated: bool = False
    attach_images: bool = False
    search_columns: Tuple[str, ...] = ()
    attribute_columns: Tuple[str, ...] = ()
    default_order: Tuple[str, ...] = ("-created_at", "-id")

    def column(self, name: str):
        return getattr(self.model, name)


def _format_property(row: Property) -> Dict[str, Any]:
    return PropertyOut.model_validate(row).model_dump(mode="json")


PROPERTY = ListingKind(
    name="property",
    plural="properties",
    model=Property,
    formatter=_format_property,
    price_column="price",
    area_column="area_sqft",
    category_column="property_type",
    bedrooms_column="bedrooms",
    owner_column="seller_id",
    moderated=True,
    attach_images=True,
    search_columns=("title", "locality", "city", "property_type"),
    attribute_columns=("listing_type",),
)

RENTAL = ListingKind(
    name="rental",
    plural="rentals",
    model=RentalProperty,
    formatter=lambda row: RentalOut.model_validate(row).model_dump(mode="json"),
    price_column="monthly_rent",
    area_column="area_sqft",
    category_column="property_type",
    bedrooms_column="bedrooms",
    owner_column="owner_id",
    moderated=True,
    search_columns=("title", "locality", "city"),
    attribute_columns=("rent_type", "tenant_type"),
)

PROJECT = ListingKind(
    name="project",
    plural="projects",
    model=Project,
    formatter=lambda row: ProjectOut.model_validate(row).model_dump(mode="json"),
    price_column="price_range_min",
    # construction status, not moderation
    category_column="status",
    search_columns=("name", "location", "city"),
)

INVESTMENT = ListingKind(
    name="investment",
    plural="opportunities",
    model=InvestmentOpportunity,
    formatter=lambda row: OpportunityOut.model_validate(row).model_dump(mode="json"),
    price_column="min_investment",
    category_column="investment_type",
    search_columns=("title", "location", "city"),
)

EVENT = ListingKind(
    name="event",
    plural="events",
    model=Event,
    formatter=lambda row: EventOut.model_validate(row).model_dump(mode="json"),
    category_column="event_type",
    search_columns=("title", "location", "city"),
    attribute_columns=("is_past",),
    default_order=("event_date", "id"),
)


# --------------------------------------
# Predicate + ordering
# --------------------------------------

def build_predicate(kind: ListingKind, filters: ListingFilters) -> Tuple[ColumnElement, ...]:
    """
    Translate filters into WHERE clauses for ``kind``. Filters the kind has no
    column for impose no constraint.
    """
    model = kind.model
    clauses: List[ColumnElement] = []

    if filters.city:
        clauses.append(model.city.ilike(f"%{filters.city}%"))
    if filters.state and hasattr(model, "state"):
        clauses.append(model.state.ilike(f"%{filters.state}%"))
    if filters.category and kind.category_column:
        clauses.append(kind.column(kind.category_column) == filters.category)

    if kind.price_column:
        price = kind.column(kind.price_column)
        if filters.min_price is not None:
            clauses.append(price >= filters.min_price)
        if filters.max_price is not None:
            clauses.append(price <= filters.max_price)

    if kind.area_column:
        area = kind.column(kind.area_column)
        if filters.min_area is not None:
            clauses.append(area >= filters.min_area)
        if filters.max_area is not None:
            clauses.append(area <= filters.max_area)

    if filters.min_bedrooms is not None and kind.bedrooms_column:
        clauses.append(kind.column(kind.bedrooms_column) >= filters.min_bedrooms)

    if filters.status and kind.moderated:
        clauses.append(model.status == filters.status)
    if filters.is_active is not None:
        clauses.append(model.is_active.is_(filters.is_active))

    if filters.owner_id is not None and kind.owner_column:
        clauses.append(kind.column(kind.owner_column) == filters.owner_id)

    if filters.search and kind.search_columns:
        pattern = f"%{filters.search}%"
        clauses.append(or_(*(kind.column(c).ilike(pattern) for c in kind.search_columns)))

    for name, value in filters.attributes:
        if name in kind.attribute_columns:
            clauses.append(kind.column(name) == value)

    return tuple(clauses)


def order_clauses(kind: ListingKind, order: Optional[Sequence[str]] = None) -> List[ColumnElement]:
    """Names prefixed with "-" sort descending."""
    result = []
    for spec in order or kind.default_order:
        if spec.startswith("-"):
            result.append(kind.column(spec[1:]).desc())
        else:
            result.append(kind.column(spec).asc())
    return result


# --------------------------------------
# Execution
# --------------------------------------

async def property_image_urls(db: AsyncSession, property_ids: Sequence[int]) -> Dict[int, List[str]]:
    """Image URLs per property, in display order."""
    if not property_ids:
        return {}
    res = await db.execute(
        select(PropertyImage.property_id, PropertyImage.image_url)
        .where(PropertyImage.property_id.in_(list(property_ids)))
        .order_by(PropertyImage.property_id, PropertyImage.display_order.asc(), PropertyImage.id.asc())
    )
    grouped: Dict[int, List[str]] = {}
    for property_id, image_url in res.all():
        grouped.setdefault(property_id, []).append(image_url)
    return grouped


async def format_rows(db: AsyncSession, kind: ListingKind, rows: Sequence[Any]) -> List[Dict[str, Any]]:
    items = [kind.formatter(row) for row in rows]
    if kind.attach_images:
        images = await property_image_urls(db, [row.id for row in rows])
        for item in items:
            item["images"] = images.get(item["id"]) or item["images"]
    return items


async def count_matching(db: AsyncSession, kind: ListingKind, predicate: Tuple[ColumnElement, ...]) -> int:
    stmt = select(func.count()).select_from(kind.model)
    if predicate:
        stmt = stmt.where(and_(*predicate))
    return int((await db.execute(stmt)).scalar_one())


async def fetch_page(
    db: AsyncSession,
    kind: ListingKind,
    filters: ListingFilters,
    page: PageRequest,
    order: Optional[Sequence[str]] = None,
) -> Tuple[List[Any], int]:
    """Raw ORM rows for one page plus the total for the same predicate."""
    predicate = build_predicate(kind, filters)

    stmt = select(kind.model)
    if predicate:
        stmt = stmt.where(and_(*predicate))
    stmt = stmt.order_by(*order_clauses(kind, order)).offset(page.offset).limit(page.limit)

    rows = list((await db.execute(stmt)).scalars().all())
    total = await count_matching(db, kind, predicate)
    return rows, total


async def list_listings(
    db: AsyncSession,
    kind: ListingKind,
    filters: ListingFilters,
    page: PageRequest,
    order: Optional[Sequence[str]] = None,
) -> ListingPage:
    rows, total = await fetch_page(db, kind, filters, page, order)
    items = await format_rows(db, kind, rows)
    return ListingPage(
        items=items,
        pagination=Pagination(page=page.page, limit=page.limit, total=total),
    )
