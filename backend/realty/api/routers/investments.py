# realty/api/routers/investments.py
from dataclasses import replace
from typing import Optional

from fastapi import APIRouter

from realty.api.dependencies import AdminContext, DbSession, OptionalContext
from realty.core.errors import NotFoundError
from realty.db import crud_investments
from realty.schemas.investment import InvestorRegistrationCreate, OpportunityCreate
from realty.services.listing_query import INVESTMENT, ListingFilters, PageRequest, list_listings

router = APIRouter()


@router.get("")
async def list_opportunities(
    db: DbSession,
    city: Optional[str] = None,
    state: Optional[str] = None,
    investment_type: Optional[str] = None,
    min_investment: Optional[str] = None,
    max_investment: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    filters = ListingFilters.from_params(
        city=city,
        state=state,
        category=investment_type,
        min_price=min_investment,
        max_price=max_investment,
        search=search,
    )
    filters = replace(filters, is_active=True)
    result = await list_listings(db, INVESTMENT, filters, PageRequest.from_params(page, limit))
    return result.to_dict("opportunities")


@router.get("/statistics")
async def statistics(db: DbSession):
    return await crud_investments.statistics(db)


@router.post("/register", status_code=201)
async def register_investor(payload: InvestorRegistrationCreate, db: DbSession, ctx: OptionalContext):
    await crud_investments.register_investor(db, payload.model_dump(), user_id=ctx.user_id)
    return {"message": "Investor registration submitted successfully"}


@router.post("/registrations/{registration_id}/contact")
async def mark_contacted(registration_id: int, db: DbSession, ctx: AdminContext):
    await crud_investments.mark_contacted(db, registration_id)
    return {"message": "Investor marked as contacted"}


@router.get("/{opportunity_id}")
async def get_opportunity(opportunity_id: int, db: DbSession):
    opportunity = await crud_investments.get_opportunity(db, opportunity_id)
    if opportunity is None:
        raise NotFoundError("Investment opportunity not found")
    return {"opportunity": INVESTMENT.formatter(opportunity)}


@router.post("", status_code=201)
async def create_opportunity(payload: OpportunityCreate, db: DbSession, ctx: AdminContext):
    opportunity = await crud_investments.create_opportunity(db, payload.to_row())
    return {
        "message": "Investment opportunity created successfully",
        "opportunity": INVESTMENT.formatter(opportunity),
    }


@router.delete("/{opportunity_id}")
async def delete_opportunity(opportunity_id: int, db: DbSession, ctx: AdminContext):
    opportunity = await crud_investments.get_opportunity(db, opportunity_id)
    if opportunity is None:
        raise NotFoundError("Investment opportunity not found")
    await crud_investments.deactivate_opportunity(db, opportunity)
    return {"message": "Investment opportunity deleted successfully"}
