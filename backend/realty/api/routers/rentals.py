# realty/api/routers/rentals.py
from typing import Optional

from fastapi import APIRouter

from realty.api.dependencies import AdminContext, DbSession, OptionalContext, UserContext
from realty.core.errors import ForbiddenError, NotFoundError
from realty.db import crud_rentals
from realty.db.models import STATUS_PENDING
from realty.schemas.rental import RentalCreate, RentalUpdate
from realty.services import moderation
from realty.services.listing_query import RENTAL, ListingFilters, PageRequest, list_listings

router = APIRouter()


@router.get("")
async def list_rentals(
    db: DbSession,
    ctx: OptionalContext,
    city: Optional[str] = None,
    state: Optional[str] = None,
    property_type: Optional[str] = None,
    min_rent: Optional[str] = None,
    max_rent: Optional[str] = None,
    min_area: Optional[str] = None,
    max_area: Optional[str] = None,
    bedrooms: Optional[str] = None,
    rent_type: Optional[str] = None,
    tenant_type: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    filters = ListingFilters.from_params(
        city=city,
        state=state,
        category=property_type,
        min_price=min_rent,
        max_price=max_rent,
        min_area=min_area,
        max_area=max_area,
        min_bedrooms=bedrooms,
        search=search,
        status=status,
        attributes={"rent_type": rent_type, "tenant_type": tenant_type},
    )
    filters = moderation.visible_filters(RENTAL, filters, ctx)
    result = await list_listings(db, RENTAL, filters, PageRequest.from_params(page, limit))
    return result.to_dict("rentals")


@router.get("/pending/list")
async def pending_rentals(db: DbSession, ctx: AdminContext, page: Optional[str] = None, limit: Optional[str] = None):
    filters = ListingFilters(status=STATUS_PENDING)
    result = await list_listings(db, RENTAL, filters, PageRequest.from_params(page, limit, default_limit=100))
    return result.to_dict("rentals")


@router.post("/{rental_id}/approve")
async def approve_rental(rental_id: int, db: DbSession, ctx: AdminContext):
    rental = await moderation.approve(db, RENTAL, rental_id)
    return {"message": "Rental property approved successfully", "rental": RENTAL.formatter(rental)}


@router.post("/{rental_id}/reject")
async def reject_rental(rental_id: int, db: DbSession, ctx: AdminContext):
    rental = await moderation.reject(db, RENTAL, rental_id)
    return {"message": "Rental property rejected successfully", "rental": RENTAL.formatter(rental)}


@router.get("/{rental_id}")
async def get_rental(rental_id: int, db: DbSession, ctx: OptionalContext):
    rental = await crud_rentals.get_rental(db, rental_id)
    if rental is None:
        raise NotFoundError("Rental property not found")
    return {"rental": RENTAL.formatter(rental)}


@router.post("", status_code=201)
async def create_rental(payload: RentalCreate, db: DbSession, ctx: OptionalContext):
    rental = await crud_rentals.create_rental(
        db,
        payload.to_row(),
        owner_id=ctx.user_id,
        auto_approve=ctx.is_admin,
    )
    return {
        "message": "Rental property created successfully",
        "rental": RENTAL.formatter(rental),
        "autoApproved": ctx.is_admin,
    }


@router.put("/{rental_id}")
async def update_rental(rental_id: int, payload: RentalUpdate, db: DbSession, ctx: UserContext):
    rental = await crud_rentals.get_rental(db, rental_id)
    if rental is None:
        raise NotFoundError("Rental property not found")
    if not ctx.can_manage(rental.owner_id):
        raise ForbiddenError("Not authorized to update this rental")

    rental = await crud_rentals.update_rental(db, rental, payload.to_row())
    return {"message": "Rental property updated successfully", "rental": RENTAL.formatter(rental)}


@router.delete("/{rental_id}")
async def delete_rental(rental_id: int, db: DbSession, ctx: UserContext):
    rental = await crud_rentals.get_rental(db, rental_id)
    if rental is None:
        raise NotFoundError("Rental property not found")
    if not ctx.can_manage(rental.owner_id):
        raise ForbiddenError("Not authorized")

    await crud_rentals.deactivate_rental(db, rental)
    return {"message": "Rental property deleted successfully"}
