# realty/db/crud_properties.py
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from realty.db.models import Property, PropertyImage, STATUS_APPROVED, STATUS_PENDING


async def get_property(db: AsyncSession, prop_id: int) -> Optional[Property]:
    res = await db.execute(select(Property).where(Property.id == prop_id))
    return res.scalars().first()


async def increment_views(db: AsyncSession, prop_id: int) -> Optional[Property]:
    """
    Bump the view counter in the database itself so concurrent readers never
    lose an increment, then return the fresh row.
    """
    res = await db.execute(
        update(Property)
        .where(Property.id == prop_id)
        .values(views=Property.views + 1)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    if not res.rowcount:
        return None
    res = await db.execute(
        select(Property).where(Property.id == prop_id).execution_options(populate_existing=True)
    )
    return res.scalars().first()


def _image_rows(prop_id: int, urls: List[str]) -> List[PropertyImage]:
    return [
        PropertyImage(property_id=prop_id, image_url=url, display_order=index)
        for index, url in enumerate(urls)
    ]


async def create_property(
    db: AsyncSession,
    data: Dict[str, Any],
    *,
    seller_id: Optional[int],
    auto_approve: bool = False,
) -> Property:
    """
    Insert the listing and its image rows in one transaction.

    Admin-created listings go live immediately; everything else waits in
    the moderation queue.
    """
    prop = Property(
        **data,
        seller_id=seller_id,
        status=STATUS_APPROVED if auto_approve else STATUS_PENDING,
        is_active=auto_approve,
        views=0,
    )
    db.add(prop)
    # need the id for the image rows
    await db.flush()
    db.add_all(_image_rows(prop.id, data.get("images") or []))
    await db.commit()
    await db.refresh(prop)
    return prop


async def update_property(db: AsyncSession, prop: Property, data: Dict[str, Any]) -> Property:
    for k, v in data.items():
        setattr(prop, k, v)
    if "images" in data:
        await db.execute(delete(PropertyImage).where(PropertyImage.property_id == prop.id))
        db.add_all(_image_rows(prop.id, data["images"] or []))
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def deactivate_property(db: AsyncSession, prop: Property) -> Property:
    prop.is_active = False
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def set_property_status(
    db: AsyncSession,
    prop: Property,
    *,
    status: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> Property:
    """Admin override: writes exactly the fields given."""
    if status is not None:
        prop.status = status
    if is_active is not None:
        prop.is_active = is_active
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop
