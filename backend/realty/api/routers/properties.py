# realty/api/routers/properties.py
from typing import Optional

from fastapi import APIRouter

from realty.api.dependencies import AdminContext, DbSession, OptionalContext, UserContext
from realty.core.errors import ForbiddenError, NotFoundError
from realty.db import crud_properties
from realty.db.models import STATUS_PENDING
from realty.schemas.property import PropertyCreate, PropertyUpdate
from realty.services import moderation
from realty.services.listing_query import (
    PROPERTY,
    ListingFilters,
    PageRequest,
    format_rows,
    list_listings,
)

router = APIRouter()


async def _formatted(db, prop) -> dict:
    items = await format_rows(db, PROPERTY, [prop])
    return items[0]


@router.get("")
async def list_properties(
    db: DbSession,
    ctx: OptionalContext,
    city: Optional[str] = None,
    state: Optional[str] = None,
    property_type: Optional[str] = None,
    listing_type: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    min_area: Optional[str] = None,
    max_area: Optional[str] = None,
    bedrooms: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    """
    Public search. Only approved + active listings unless an admin asks for a
    specific status.
    """
    filters = ListingFilters.from_params(
        city=city,
        state=state,
        category=property_type,
        min_price=min_price,
        max_price=max_price,
        min_area=min_area,
        max_area=max_area,
        min_bedrooms=bedrooms,
        search=search,
        status=status,
        attributes={"listing_type": listing_type},
    )
    filters = moderation.visible_filters(PROPERTY, filters, ctx)
    result = await list_listings(db, PROPERTY, filters, PageRequest.from_params(page, limit))
    return result.to_dict("properties")


# Fixed paths must be declared before "/{prop_id}"
@router.get("/my-properties/list")
async def my_properties(
    db: DbSession,
    ctx: UserContext,
    status: Optional[str] = None,
    property_type: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    """Every listing the caller owns, whatever its moderation state."""
    filters = ListingFilters.from_params(
        status=status,
        category=property_type,
        search=search,
        owner_id=ctx.user_id,
    )
    result = await list_listings(db, PROPERTY, filters, PageRequest.from_params(page, limit, default_limit=10))
    return result.to_dict("properties")


@router.get("/pending/list")
async def pending_properties(db: DbSession, ctx: AdminContext, page: Optional[str] = None, limit: Optional[str] = None):
    filters = ListingFilters(status=STATUS_PENDING)
    result = await list_listings(db, PROPERTY, filters, PageRequest.from_params(page, limit, default_limit=100))
    return result.to_dict("properties")


@router.post("/{prop_id}/approve")
async def approve_property(prop_id: int, db: DbSession, ctx: AdminContext):
    prop = await moderation.approve(db, PROPERTY, prop_id)
    return {"message": "Property approved successfully", "property": await _formatted(db, prop)}


@router.post("/{prop_id}/reject")
async def reject_property(prop_id: int, db: DbSession, ctx: AdminContext):
    prop = await moderation.reject(db, PROPERTY, prop_id)
    return {"message": "Property rejected successfully", "property": await _formatted(db, prop)}


@router.get("/{prop_id}")
async def get_property(prop_id: int, db: DbSession, ctx: OptionalContext):
    """
    Detail view. Each call counts as one view.
    A known id resolves regardless of moderation status.
    """
    prop = await crud_properties.increment_views(db, prop_id)
    if prop is None:
        raise NotFoundError("Property not found")
    return {"property": await _formatted(db, prop)}


@router.post("", status_code=201)
async def create_property(payload: PropertyCreate, db: DbSession, ctx: OptionalContext):
    auto_approve = ctx.is_admin
    prop = await crud_properties.create_property(
        db,
        payload.to_row(),
        seller_id=ctx.user_id,
        auto_approve=auto_approve,
    )
    message = (
        "Property listed successfully and approved automatically"
        if auto_approve
        else "Property created successfully"
    )
    return {
        "message": message,
        "property": await _formatted(db, prop),
        "autoApproved": auto_approve,
    }


@router.put("/{prop_id}")
async def update_property(prop_id: int, payload: PropertyUpdate, db: DbSession, ctx: UserContext):
    prop = await crud_properties.get_property(db, prop_id)
    if prop is None:
        raise NotFoundError("Property not found")
    if not ctx.can_manage(prop.seller_id):
        raise ForbiddenError("Not authorized to update this property")

    prop = await crud_properties.update_property(db, prop, payload.to_row())
    return {"message": "Property updated successfully", "property": await _formatted(db, prop)}


@router.delete("/{prop_id}")
async def delete_property(prop_id: int, db: DbSession, ctx: UserContext):
    prop = await crud_properties.get_property(db, prop_id)
    if prop is None:
        raise NotFoundError("Property not found")
    if not ctx.can_manage(prop.seller_id):
        raise ForbiddenError("Not authorized")

    await crud_properties.deactivate_property(db, prop)
    return {"message": "Property deleted successfully"}
