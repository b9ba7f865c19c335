# realty/api/routers/contact.py
from typing import Optional

from fastapi import APIRouter

from realty.api.dependencies import AdminContext, DbSession
from realty.core.config import settings
from realty.core.errors import NotFoundError
from realty.db import crud_contacts
from realty.schemas.contact import ContactCreate, ContactOut
from realty.services.listing_query import PageRequest, Pagination, parse_bool

router = APIRouter()


@router.post("", status_code=201)
async def submit_contact(payload: ContactCreate, db: DbSession):
    submission = await crud_contacts.create_submission(db, payload.model_dump())
    return {
        "message": "Thank you for contacting us. We will get back to you soon.",
        "submission": ContactOut.model_validate(submission),
    }


@router.get("/submissions")
async def list_submissions(
    db: DbSession,
    ctx: AdminContext,
    is_read: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    page_req = PageRequest.from_params(page, limit, default_limit=settings.ADMIN_PAGE_SIZE)
    items, total = await crud_contacts.list_submissions(
        db,
        is_read=parse_bool(is_read),
        offset=page_req.offset,
        limit=page_req.limit,
    )
    return {
        "submissions": [ContactOut.model_validate(s) for s in items],
        "pagination": Pagination(page_req.page, page_req.limit, total).to_dict(),
    }


async def _get_or_404(db, submission_id: int):
    submission = await crud_contacts.get_submission(db, submission_id)
    if submission is None:
        raise NotFoundError("Submission not found")
    return submission


@router.get("/submissions/{submission_id}")
async def get_submission(submission_id: int, db: DbSession, ctx: AdminContext):
    submission = await _get_or_404(db, submission_id)
    return {"submission": ContactOut.model_validate(submission)}


@router.put("/submissions/{submission_id}/read")
async def mark_read(submission_id: int, db: DbSession, ctx: AdminContext):
    submission = await _get_or_404(db, submission_id)
    await crud_contacts.mark_submission(db, submission)
    return {"message": "Submission marked as read"}


@router.put("/submissions/{submission_id}/respond")
async def mark_responded(submission_id: int, db: DbSession, ctx: AdminContext):
    submission = await _get_or_404(db, submission_id)
    await crud_contacts.mark_submission(db, submission, responded=True)
    return {"message": "Submission marked as responded"}


@router.delete("/submissions/{submission_id}")
async def delete_submission(submission_id: int, db: DbSession, ctx: AdminContext):
    submission = await _get_or_404(db, submission_id)
    await crud_contacts.delete_submission(db, submission)
    return {"message": "Submission deleted successfully"}
