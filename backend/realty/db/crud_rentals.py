# realty/db/crud_rentals.py
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from realty.db.models import RentalProperty, STATUS_APPROVED, STATUS_PENDING


async def get_rental(db: AsyncSession, rental_id: int) -> Optional[RentalProperty]:
    res = await db.execute(select(RentalProperty).where(RentalProperty.id == rental_id))
    return res.scalars().first()


async def create_rental(
    db: AsyncSession,
    data: Dict[str, Any],
    *,
    owner_id: Optional[int],
    auto_approve: bool = False,
) -> RentalProperty:
    rental = RentalProperty(
        **data,
        owner_id=owner_id,
        status=STATUS_APPROVED if auto_approve else STATUS_PENDING,
        is_active=auto_approve,
    )
    db.add(rental)
    await db.commit()
    await db.refresh(rental)
    return rental


async def update_rental(db: AsyncSession, rental: RentalProperty, data: Dict[str, Any]) -> RentalProperty:
    for k, v in data.items():
        setattr(rental, k, v)
    db.add(rental)
    await db.commit()
    await db.refresh(rental)
    return rental


async def deactivate_rental(db: AsyncSession, rental: RentalProperty) -> RentalProperty:
    rental.is_active = False
    db.add(rental)
    await db.commit()
    await db.refresh(rental)
    return rental
