# realty/services/moderation.py
"""
Moderation gate and status transitions for properties and rentals.

pending  -> approved  (is_active = True)
pending  -> rejected  (is_active = False)
approved -> rejected  (is_active = False)

Transitions are plain assignments, so repeating one leaves the row unchanged.
A rejected listing only leaves that state through the admin status override.
"""
from dataclasses import replace
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from realty.api.dependencies import RequestContext
from realty.core.errors import ConflictError, NotFoundError
from realty.core.logging import get_logger
from realty.db.models import STATUS_APPROVED, STATUS_REJECTED
from realty.services.listing_query import ListingFilters, ListingKind

logger = get_logger("realty.moderation")


def visible_filters(kind: ListingKind, filters: ListingFilters, ctx: RequestContext) -> ListingFilters:
    """
    Apply the public visibility rules to caller-supplied filters.

    An admin asking for an explicit status sees exactly that status, active or
    not. Everyone else gets approved + active rows whatever status they sent.
    """
    if not kind.moderated:
        return replace(filters, status=None, is_active=True)
    if ctx.is_admin and filters.status:
        return replace(filters, is_active=None)
    return replace(filters, status=STATUS_APPROVED, is_active=True)


async def _get_or_404(db: AsyncSession, kind: ListingKind, listing_id: int) -> Any:
    row = await db.get(kind.model, listing_id)
    if row is None:
        raise NotFoundError(f"{kind.name.capitalize()} not found")
    return row


async def set_status(
    db: AsyncSession,
    kind: ListingKind,
    listing_id: int,
    *,
    status: str,
    is_active: bool,
) -> Any:
    row = await _get_or_404(db, kind, listing_id)
    row.status = status
    row.is_active = is_active
    db.add(row)
    await db.commit()
    await db.refresh(row)
    logger.info("%s %s -> %s", kind.name, listing_id, status)
    return row


async def approve(db: AsyncSession, kind: ListingKind, listing_id: int) -> Any:
    row = await _get_or_404(db, kind, listing_id)
    if row.status == STATUS_REJECTED:
        raise ConflictError(f"Rejected {kind.name} cannot be approved")
    return await set_status(db, kind, listing_id, status=STATUS_APPROVED, is_active=True)


async def reject(db: AsyncSession, kind: ListingKind, listing_id: int) -> Any:
    return await set_status(db, kind, listing_id, status=STATUS_REJECTED, is_active=False)

