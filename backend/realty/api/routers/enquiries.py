# realty/api/routers/enquiries.py
from fastapi import APIRouter

from realty.api.dependencies import DbSession, UserContext
from realty.core.errors import ForbiddenError, InvalidReferenceError, NotFoundError
from realty.db import crud_enquiries, crud_properties
from realty.schemas.enquiry import EnquiryCreate, EnquiryOut

router = APIRouter()


@router.post("", status_code=201)
async def create_enquiry(payload: EnquiryCreate, db: DbSession, ctx: UserContext):
    prop = await crud_properties.get_property(db, payload.property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    if prop.seller_id is None:
        raise InvalidReferenceError("Property has no seller")

    enquiry = await crud_enquiries.create_enquiry(
        db,
        property_id=prop.id,
        buyer_id=ctx.user_id,
        seller_id=prop.seller_id,
        message=payload.message,
    )
    return {"message": "Enquiry sent successfully", "enquiry": EnquiryOut.model_validate(enquiry)}


@router.get("/sent")
async def sent_enquiries(db: DbSession, ctx: UserContext):
    rows = await crud_enquiries.list_sent(db, ctx.user_id)
    return {"enquiries": [EnquiryOut.model_validate(r) for r in rows]}


@router.get("/received")
async def received_enquiries(db: DbSession, ctx: UserContext):
    rows = await crud_enquiries.list_received(db, ctx.user_id)
    return {"enquiries": [EnquiryOut.model_validate(r) for r in rows]}


@router.put("/{enquiry_id}/read")
async def mark_read(enquiry_id: int, db: DbSession, ctx: UserContext):
    enquiry = await crud_enquiries.get_enquiry(db, enquiry_id)
    if enquiry is None:
        raise NotFoundError("Enquiry not found")
    if not ctx.can_manage(enquiry.seller_id):
        raise ForbiddenError("Not authorized")

    await crud_enquiries.mark_read(db, enquiry)
    return {"message": "Enquiry marked as read"}
