# realty/db/crud_enquiries.py
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from realty.db.models import Enquiry, Property, User


async def get_enquiry(db: AsyncSession, enquiry_id: int) -> Optional[Enquiry]:
    res = await db.execute(select(Enquiry).where(Enquiry.id == enquiry_id))
    return res.scalars().first()


async def create_enquiry(
    db: AsyncSession,
    *,
    property_id: int,
    buyer_id: int,
    seller_id: int,
    message: str,
) -> Enquiry:
    enquiry = Enquiry(
        property_id=property_id,
        buyer_id=buyer_id,
        seller_id=seller_id,
        message=message,
    )
    db.add(enquiry)
    await db.commit()
    await db.refresh(enquiry)
    return enquiry


def _row(enquiry: Enquiry, **extra: Any) -> Dict[str, Any]:
    item = {c.name: getattr(enquiry, c.name) for c in Enquiry.__table__.columns}
    item.update(extra)
    return item


async def list_sent(db: AsyncSession, buyer_id: int) -> List[Dict[str, Any]]:
    stmt = (
        select(Enquiry, Property.title, Property.locality, Property.city)
        .join(Property, Enquiry.property_id == Property.id)
        .where(Enquiry.buyer_id == buyer_id)
        .order_by(Enquiry.created_at.desc(), Enquiry.id.desc())
    )
    rows = (await db.execute(stmt)).all()
    return [
        _row(enquiry, property_title=title, locality=locality, city=city)
        for enquiry, title, locality, city in rows
    ]


async def list_received(db: AsyncSession, seller_id: int) -> List[Dict[str, Any]]:
    """Enquiries on the seller's listings, with the buyer's contact details."""
    stmt = (
        select(Enquiry, Property.title, Property.locality, Property.city, User.full_name, User.email, User.phone)
        .join(Property, Enquiry.property_id == Property.id)
        .join(User, Enquiry.buyer_id == User.id)
        .where(Enquiry.seller_id == seller_id)
        .order_by(Enquiry.created_at.desc(), Enquiry.id.desc())
    )
    rows = (await db.execute(stmt)).all()
    return [
        _row(
            enquiry,
            property_title=title,
            locality=locality,
            city=city,
            buyer_name=name,
            buyer_email=email,
            buyer_phone=phone,
        )
        for enquiry, title, locality, city, name, email, phone in rows
    ]


async def mark_read(db: AsyncSession, enquiry: Enquiry) -> Enquiry:
    enquiry.is_read = True
    db.add(enquiry)
    await db.commit()
    await db.refresh(enquiry)
    return enquiry
