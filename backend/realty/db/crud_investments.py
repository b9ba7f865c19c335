# realty/db/crud_investments.py
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from realty.core.errors import NotFoundError
from realty.db.models import InvestmentOpportunity, InvestorRegistration


async def get_opportunity(db: AsyncSession, opportunity_id: int) -> Optional[InvestmentOpportunity]:
    res = await db.execute(select(InvestmentOpportunity).where(InvestmentOpportunity.id == opportunity_id))
    return res.scalars().first()


async def create_opportunity(db: AsyncSession, data: Dict[str, Any]) -> InvestmentOpportunity:
    opportunity = InvestmentOpportunity(**data, investors_count=0, is_active=True)
    db.add(opportunity)
    await db.commit()
    await db.refresh(opportunity)
    return opportunity


async def deactivate_opportunity(db: AsyncSession, opportunity: InvestmentOpportunity) -> InvestmentOpportunity:
    opportunity.is_active = False
    db.add(opportunity)
    await db.commit()
    await db.refresh(opportunity)
    return opportunity


async def register_investor(
    db: AsyncSession,
    data: Dict[str, Any],
    *,
    user_id: Optional[int] = None,
) -> InvestorRegistration:
    """
    Record interest; when tied to an opportunity, bump its investor count
    in the same transaction.
    """
    opportunity_id = data.get("opportunity_id")
    if opportunity_id is not None:
        res = await db.execute(
            update(InvestmentOpportunity)
            .where(
                InvestmentOpportunity.id == opportunity_id,
                InvestmentOpportunity.is_active.is_(True),
            )
            .values(investors_count=InvestmentOpportunity.investors_count + 1)
            .execution_options(synchronize_session=False)
        )
        if not res.rowcount:
            await db.rollback()
            raise NotFoundError("Investment opportunity not found")

    registration = InvestorRegistration(**data, user_id=user_id)
    db.add(registration)
    await db.commit()
    await db.refresh(registration)
    return registration


async def statistics(db: AsyncSession) -> Dict[str, Any]:
    active = InvestmentOpportunity.is_active.is_(True)
    total_opportunities = (
        await db.execute(select(func.count()).select_from(InvestmentOpportunity).where(active))
    ).scalar_one()
    total_investors = (await db.execute(select(func.count()).select_from(InvestorRegistration))).scalar_one()
    total_investment = (
        await db.execute(select(func.sum(InvestmentOpportunity.min_investment)).where(active))
    ).scalar_one()
    return {
        "totalOpportunities": int(total_opportunities),
        "totalInvestors": int(total_investors),
        "totalInvestment": float(total_investment or 0),
    }


async def list_registrations(
    db: AsyncSession,
    *,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[Dict[str, Any]], int]:
    """Registrations newest first, each with its opportunity title."""
    stmt = (
        select(InvestorRegistration, InvestmentOpportunity.title)
        .outerjoin(InvestmentOpportunity, InvestorRegistration.opportunity_id == InvestmentOpportunity.id)
        .order_by(InvestorRegistration.created_at.desc(), InvestorRegistration.id.desc())
        .offset(offset)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).all()
    total = (await db.execute(select(func.count()).select_from(InvestorRegistration))).scalar_one()

    items = []
    for registration, title in rows:
        item = {c.name: getattr(registration, c.name) for c in InvestorRegistration.__table__.columns}
        item["opportunity_title"] = title
        items.append(item)
    return items, int(total)


async def mark_contacted(db: AsyncSession, registration_id: int) -> InvestorRegistration:
    res = await db.execute(select(InvestorRegistration).where(InvestorRegistration.id == registration_id))
    registration = res.scalars().first()
    if registration is None:
        raise NotFoundError("Registration not found")
    registration.is_contacted = True
    db.add(registration)
    await db.commit()
    await db.refresh(registration)
    return registration
