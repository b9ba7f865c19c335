# realty/api/routers/admin.py
"""
Admin panel. Every route here requires an admin token; listings are shown
across all statuses, active or not.
"""
from typing import Optional

from fastapi import APIRouter

from realty.api.dependencies import AdminContext, DbSession
from realty.core.config import settings
from realty.core.errors import ForbiddenError, NotFoundError
from realty.db import crud_contacts, crud_investments, crud_properties, crud_users
from realty.schemas.contact import ContactOut
from realty.schemas.investment import InvestorRegistrationOut
from realty.schemas.property import PropertyStatusUpdate
from realty.schemas.user import UserAdminUpdate, UserOut
from realty.services import moderation
from realty.services.dashboard import dashboard_stats
from realty.services.listing_query import (
    EVENT,
    INVESTMENT,
    PROJECT,
    PROPERTY,
    RENTAL,
    ListingFilters,
    PageRequest,
    Pagination,
    format_rows,
    list_listings,
    parse_bool,
)

router = APIRouter()


def _admin_page(page: Optional[str], limit: Optional[str]) -> PageRequest:
    return PageRequest.from_params(page, limit, default_limit=settings.ADMIN_PAGE_SIZE)


@router.get("/dashboard")
async def dashboard(db: DbSession, ctx: AdminContext):
    return {"stats": await dashboard_stats(db.bind)}


# --------------------------------------
# Users
# --------------------------------------

async def _user_or_404(db, user_id: int):
    user = await crud_users.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("/users")
async def list_users(
    db: DbSession,
    ctx: AdminContext,
    role: Optional[str] = None,
    is_active: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    page_req = _admin_page(page, limit)
    users, total = await crud_users.list_users(
        db,
        role=role or None,
        is_active=parse_bool(is_active),
        offset=page_req.offset,
        limit=page_req.limit,
    )
    return {
        "users": [UserOut.model_validate(u) for u in users],
        "pagination": Pagination(page_req.page, page_req.limit, total).to_dict(),
    }


@router.get("/users/{user_id}")
async def get_user(user_id: int, db: DbSession, ctx: AdminContext):
    return {"user": UserOut.model_validate(await _user_or_404(db, user_id))}


@router.put("/users/{user_id}/toggle")
async def toggle_user(user_id: int, db: DbSession, ctx: AdminContext):
    user = await crud_users.toggle_user(db, await _user_or_404(db, user_id))
    return {
        "message": f"User {'activated' if user.is_active else 'deactivated'}",
        "user": UserOut.model_validate(user),
    }


@router.put("/users/{user_id}")
async def update_user(user_id: int, payload: UserAdminUpdate, db: DbSession, ctx: AdminContext):
    user = await _user_or_404(db, user_id)
    user = await crud_users.update_user(db, user, payload.model_dump(exclude_unset=True))
    return {"message": "User updated successfully", "user": UserOut.model_validate(user)}


@router.delete("/users/{user_id}")
async def delete_user(user_id: int, db: DbSession, ctx: AdminContext):
    user = await _user_or_404(db, user_id)
    if user.is_admin:
        raise ForbiddenError("Cannot delete admin users")
    await crud_users.deactivate_user(db, user)
    return {"message": "User deactivated successfully"}


# --------------------------------------
# Properties
# --------------------------------------

async def _property_or_404(db, prop_id: int):
    prop = await crud_properties.get_property(db, prop_id)
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


async def _formatted_property(db, prop) -> dict:
    return (await format_rows(db, PROPERTY, [prop]))[0]


@router.get("/properties")
async def list_properties(
    db: DbSession,
    ctx: AdminContext,
    status: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    filters = ListingFilters.from_params(status=status, search=search)
    result = await list_listings(db, PROPERTY, filters, _admin_page(page, limit))
    return result.to_dict("properties")


@router.get("/properties/{prop_id}")
async def get_property(prop_id: int, db: DbSession, ctx: AdminContext):
    prop = await _property_or_404(db, prop_id)
    return {"property": await _formatted_property(db, prop)}


@router.put("/properties/{prop_id}/status")
async def update_property_status(prop_id: int, payload: PropertyStatusUpdate, db: DbSession, ctx: AdminContext):
    prop = await _property_or_404(db, prop_id)
    prop = await crud_properties.set_property_status(
        db,
        prop,
        status=payload.status,
        is_active=payload.is_active,
    )
    return {
        "message": "Property status updated successfully",
        "property": await _formatted_property(db, prop),
    }


@router.post("/properties/{prop_id}/approve")
async def approve_property(prop_id: int, db: DbSession, ctx: AdminContext):
    prop = await moderation.approve(db, PROPERTY, prop_id)
    return {"message": "Property approved successfully", "property": await _formatted_property(db, prop)}


@router.post("/properties/{prop_id}/reject")
async def reject_property(prop_id: int, db: DbSession, ctx: AdminContext):
    prop = await moderation.reject(db, PROPERTY, prop_id)
    return {"message": "Property rejected successfully", "property": await _formatted_property(db, prop)}


@router.delete("/properties/{prop_id}")
async def delete_property(prop_id: int, db: DbSession, ctx: AdminContext):
    prop = await _property_or_404(db, prop_id)
    await crud_properties.deactivate_property(db, prop)
    return {"message": "Property deleted successfully"}


# --------------------------------------
# Other listings
# --------------------------------------

@router.get("/rentals")
async def list_rentals(
    db: DbSession,
    ctx: AdminContext,
    status: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    filters = ListingFilters.from_params(status=status)
    result = await list_listings(db, RENTAL, filters, _admin_page(page, limit))
    return result.to_dict("rentals")


@router.get("/projects")
async def list_projects(db: DbSession, ctx: AdminContext, page: Optional[str] = None, limit: Optional[str] = None):
    result = await list_listings(db, PROJECT, ListingFilters(), _admin_page(page, limit))
    return result.to_dict("projects")


@router.get("/events")
async def list_events(db: DbSession, ctx: AdminContext, page: Optional[str] = None, limit: Optional[str] = None):
    result = await list_listings(db, EVENT, ListingFilters(), _admin_page(page, limit), order=("-event_date", "-id"))
    return result.to_dict("events")


@router.get("/investments")
async def list_investments(db: DbSession, ctx: AdminContext, page: Optional[str] = None, limit: Optional[str] = None):
    result = await list_listings(db, INVESTMENT, ListingFilters(), _admin_page(page, limit))
    return result.to_dict("opportunities")


@router.get("/investor-registrations")
async def list_investor_registrations(
    db: DbSession,
    ctx: AdminContext,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    page_req = _admin_page(page, limit)
    rows, total = await crud_investments.list_registrations(db, offset=page_req.offset, limit=page_req.limit)
    return {
        "registrations": [InvestorRegistrationOut.model_validate(r) for r in rows],
        "pagination": Pagination(page_req.page, page_req.limit, total).to_dict(),
    }


# --------------------------------------
# Contact submissions
# --------------------------------------

@router.get("/contact-submissions")
async def list_contact_submissions(
    db: DbSession,
    ctx: AdminContext,
    is_read: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    page_req = _admin_page(page, limit)
    items, total = await crud_contacts.list_submissions(
        db,
        is_read=parse_bool(is_read),
        offset=page_req.offset,
        limit=page_req.limit,
    )
    return {
        "submissions": [ContactOut.model_validate(s) for s in items],
        "pagination": Pagination(page_req.page, page_req.limit, total).to_dict(),
    }


async def _submission_or_404(db, submission_id: int):
    submission = await crud_contacts.get_submission(db, submission_id)
    if submission is None:
        raise NotFoundError("Contact submission not found")
    return submission


@router.get("/contact-submissions/{submission_id}")
async def get_contact_submission(submission_id: int, db: DbSession, ctx: AdminContext):
    submission = await _submission_or_404(db, submission_id)
    return {"submission": ContactOut.model_validate(submission)}


@router.delete("/contact-submissions/{submission_id}")
async def delete_contact_submission(submission_id: int, db: DbSession, ctx: AdminContext):
    submission = await _submission_or_404(db, submission_id)
    await crud_contacts.delete_submission(db, submission)
    return {"message": "Contact submission deleted successfully"}
