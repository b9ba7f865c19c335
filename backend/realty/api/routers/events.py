# realty/api/routers/events.py
from dataclasses import replace
from typing import Optional

from fastapi import APIRouter

from realty.api.dependencies import AdminContext, DbSession
from realty.core.errors import NotFoundError
from realty.db import crud_events
from realty.schemas.event import EventCreate, EventRegistrationCreate, EventUpdate
from realty.services.listing_query import EVENT, ListingFilters, PageRequest, list_listings, parse_bool

router = APIRouter()


@router.get("")
async def list_events(
    db: DbSession,
    city: Optional[str] = None,
    event_type: Optional[str] = None,
    is_past: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    """
    Upcoming events soonest first; ``is_past=true`` gives past events,
    most recent first.
    """
    await crud_events.sweep_past_events(db)

    past = bool(parse_bool(is_past))
    filters = ListingFilters.from_params(
        city=city,
        category=event_type,
        search=search,
        attributes={"is_past": past},
    )
    filters = replace(filters, is_active=True)
    order = ("-event_date", "-id") if past else ("event_date", "id")
    result = await list_listings(db, EVENT, filters, PageRequest.from_params(page, limit), order=order)
    return result.to_dict("events")


@router.get("/{event_id}")
async def get_event(event_id: int, db: DbSession):
    event = await crud_events.get_event(db, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return {"event": EVENT.formatter(event)}


@router.post("", status_code=201)
async def create_event(payload: EventCreate, db: DbSession, ctx: AdminContext):
    event = await crud_events.create_event(db, payload.to_row())
    return {"message": "Event created successfully", "event": EVENT.formatter(event)}


@router.post("/{event_id}/register", status_code=201)
async def register_for_event(event_id: int, payload: EventRegistrationCreate, db: DbSession):
    await crud_events.register_for_event(db, event_id, payload.model_dump())
    return {"message": "Successfully registered for event"}


@router.put("/{event_id}")
async def update_event(event_id: int, payload: EventUpdate, db: DbSession, ctx: AdminContext):
    event = await crud_events.get_event(db, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    event = await crud_events.update_event(db, event, payload.to_row())
    return {"message": "Event updated successfully", "event": EVENT.formatter(event)}


@router.delete("/{event_id}")
async def delete_event(event_id: int, db: DbSession, ctx: AdminContext):
    event = await crud_events.get_event(db, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    await crud_events.deactivate_event(db, event)
    return {"message": "Event deleted successfully"}
