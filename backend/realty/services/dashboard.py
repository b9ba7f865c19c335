# realty/services/dashboard.py
"""
Admin dashboard counters.

Each count runs on its own connection, concurrently. They are not taken
from one snapshot, so under concurrent writes the numbers may disagree
slightly with each other.
"""
import asyncio
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Select

from realty.db.models import (
    ContactSubmission,
    Enquiry,
    Event,
    InvestmentOpportunity,
    Project,
    Property,
    RentalProperty,
    STATUS_PENDING,
    User,
)


def _count(model, *where) -> Select:
    stmt = select(func.count()).select_from(model)
    if where:
        stmt = stmt.where(*where)
    return stmt


DASHBOARD_COUNTS: Dict[str, Select] = {
    "totalUsers": _count(User),
    "totalProperties": _count(Property, Property.is_active.is_(True)),
    "totalRentals": _count(RentalProperty, RentalProperty.is_active.is_(True)),
    "totalProjects": _count(Project, Project.is_active.is_(True)),
    "totalEvents": _count(Event, Event.is_active.is_(True)),
    "totalInvestments": _count(InvestmentOpportunity, InvestmentOpportunity.is_active.is_(True)),
    "pendingProperties": _count(Property, Property.status == STATUS_PENDING),
    "pendingRentals": _count(RentalProperty, RentalProperty.status == STATUS_PENDING),
    "unreadEnquiries": _count(Enquiry, Enquiry.is_read.is_(False)),
    "unreadContacts": _count(ContactSubmission, ContactSubmission.is_read.is_(False)),
}


async def _run_count(engine: AsyncEngine, stmt: Select) -> int:
    async with engine.connect() as conn:
        return int((await conn.execute(stmt)).scalar_one())


async def dashboard_stats(engine: AsyncEngine) -> Dict[str, int]:
    names = list(DASHBOARD_COUNTS)
    values = await asyncio.gather(*(_run_count(engine, DASHBOARD_COUNTS[n]) for n in names))
    return dict(zip(names, values))
