# realty/db/crud_contacts.py
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from realty.db.models import ContactSubmission


async def create_submission(db: AsyncSession, data: Dict[str, Any]) -> ContactSubmission:
    submission = ContactSubmission(**data)
    db.add(submission)
    await db.commit()
    await db.refresh(submission)
    return submission


async def get_submission(db: AsyncSession, submission_id: int) -> Optional[ContactSubmission]:
    res = await db.execute(select(ContactSubmission).where(ContactSubmission.id == submission_id))
    return res.scalars().first()


async def list_submissions(
    db: AsyncSession,
    *,
    is_read: Optional[bool] = None,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[ContactSubmission], int]:
    stmt = select(ContactSubmission)
    count_stmt = select(func.count()).select_from(ContactSubmission)
    if is_read is not None:
        stmt = stmt.where(ContactSubmission.is_read.is_(is_read))
        count_stmt = count_stmt.where(ContactSubmission.is_read.is_(is_read))

    stmt = stmt.order_by(ContactSubmission.created_at.desc(), ContactSubmission.id.desc())
    res = await db.execute(stmt.offset(offset).limit(limit))
    total = (await db.execute(count_stmt)).scalar_one()
    return list(res.scalars().all()), int(total)


async def mark_submission(
    db: AsyncSession,
    submission: ContactSubmission,
    *,
    responded: bool = False,
) -> ContactSubmission:
    """Responding to a message implies it has been read."""
    submission.is_read = True
    if responded:
        submission.is_responded = True
    db.add(submission)
    await db.commit()
    await db.refresh(submission)
    return submission


async def delete_submission(db: AsyncSession, submission: ContactSubmission) -> None:
    await db.delete(submission)
    await db.commit()
