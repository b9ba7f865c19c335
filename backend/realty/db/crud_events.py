# realty/db/crud_events.py
"""
Events: the is_past sweep, create/update with date + time folding, and
capacity-checked registration.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from realty.core.errors import NotFoundError, ValidationFailedError
from realty.core.logging import get_logger
from realty.db.base import utcnow
from realty.db.models import Event, EventRegistration

logger = get_logger("realty.events")


def combine_event_datetime(event_date: datetime, event_time: Optional[str] = None) -> datetime:
    """
    Fold an optional "HH:MM" into the date, then normalise to naive UTC.
    A naive input is taken as UTC already.
    """
    if event_time:
        hours, _, minutes = event_time.partition(":")
        try:
            event_date = event_date.replace(
                hour=int(hours or 0),
                minute=int(minutes[:2] or 0),
                second=0,
                microsecond=0,
            )
        except ValueError:
            raise ValidationFailedError("Invalid event_time", {"event_time": event_time})
    if event_date.tzinfo is not None:
        event_date = event_date.astimezone(timezone.utc).replace(tzinfo=None)
    return event_date


async def sweep_past_events(db: AsyncSession, now: Optional[datetime] = None) -> None:
    """
    Re-derive is_past for active events against a single timestamp.
    Running it twice in a row changes nothing.
    """
    now = now or utcnow()
    await db.execute(
        update(Event)
        .where(Event.is_active.is_(True), Event.event_date < now, Event.is_past.is_(False))
        .values(is_past=True)
        .execution_options(synchronize_session=False)
    )
    await db.execute(
        update(Event)
        .where(Event.is_active.is_(True), Event.event_date >= now, Event.is_past.is_(True))
        .values(is_past=False)
        .execution_options(synchronize_session=False)
    )
    await db.commit()


async def get_event(db: AsyncSession, event_id: int) -> Optional[Event]:
    res = await db.execute(select(Event).where(Event.id == event_id))
    return res.scalars().first()


async def create_event(db: AsyncSession, data: Dict[str, Any]) -> Event:
    data = dict(data)
    data["event_date"] = combine_event_datetime(data["event_date"], data.get("event_time"))
    event = Event(
        **data,
        is_past=data["event_date"] < utcnow(),
        is_active=True,
        registered_count=0,
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event


async def update_event(db: AsyncSession, event: Event, data: Dict[str, Any]) -> Event:
    data = dict(data)
    if data.get("event_date") is not None:
        # keep the stored time when only the date moves
        data["event_date"] = combine_event_datetime(
            data["event_date"], data.get("event_time") or event.event_time
        )
        data["is_past"] = data["event_date"] < utcnow()
    for k, v in data.items():
        setattr(event, k, v)
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event


async def deactivate_event(db: AsyncSession, event: Event) -> Event:
    event.is_active = False
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event


async def register_for_event(db: AsyncSession, event_id: int, data: Dict[str, Any]) -> EventRegistration:
    """
    Take a seat and record the attendee in one transaction.

    The seat is claimed with a conditional increment, so two concurrent
    registrations can never push registered_count past max_attendees.
    Soft-deleted events count as missing.
    """
    event = await get_event(db, event_id)
    if event is None or not event.is_active:
        raise NotFoundError("Event not found")

    res = await db.execute(
        update(Event)
        .where(
            Event.id == event_id,
            Event.is_active.is_(True),
            or_(Event.max_attendees.is_(None), Event.registered_count < Event.max_attendees),
        )
        .values(registered_count=Event.registered_count + 1)
        .execution_options(synchronize_session=False)
    )
    if not res.rowcount:
        await db.rollback()
        raise ValidationFailedError("Event is full")

    registration = EventRegistration(event_id=event_id, **data)
    db.add(registration)
    await db.commit()
    await db.refresh(registration)
    logger.info("registration %s for event %s", registration.id, event_id)
    return registration
