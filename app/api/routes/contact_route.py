from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict

from app.actions import contact as contact_actions
from app.api.responses import respond
from app.services.contact.contact_service import ContactService

router = APIRouter(prefix="/contact-requests", tags=["Contact requests"])


# ids are validated by the service so errors come back in the result shape
class ContactRequestBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    listing_id: str
    seller_id: str
    buyer_id: str
    message: str | None = None


class ContactStatusBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    status: str


@router.post(
    "/",
    summary="Request a seller's contact details",
    description="Creates a pending request, or returns the existing one for this buyer and listing.",
)
async def request_contact(
    *,
    body: ContactRequestBody,
    contact_service: ContactService = Depends(ContactService.get_dependency),
):
    result = await contact_actions.request_contact(
        contact_service, body.listing_id, body.seller_id, body.buyer_id, body.message
    )
    return respond(result, status.HTTP_201_CREATED)


@router.get("/status", summary="Contact status of a buyer for a listing")
async def get_contact_status(
    listing_id: str,
    buyer_id: str,
    contact_service: ContactService = Depends(ContactService.get_dependency),
):
    result = await contact_actions.get_contact_status(
        contact_service, listing_id, buyer_id
    )
    return respond(result)


@router.patch(
    "/{request_id}",
    summary="Accept or decline a contact request",
    description="Only the seller can answer, and only while the request is pending.",
)
async def update_contact_status(
    request_id: str,
    body: ContactStatusBody,
    contact_service: ContactService = Depends(ContactService.get_dependency),
):
    result = await contact_actions.update_contact_status(
        contact_service, request_id, body.status
    )
    return respond(result)


@router.get("/seller/{seller_id}", summary="All contact requests of a seller")
async def get_seller_contact_requests(
    seller_id: str,
    contact_service: ContactService = Depends(ContactService.get_dependency),
):
    result = await contact_actions.get_seller_contact_requests(
        contact_service, seller_id
    )
    return respond(result)


@router.get(
    "/seller/{seller_id}/incoming",
    summary="Seller dashboard of incoming requests",
)
async def get_incoming_requests(
    seller_id: str,
    contact_service: ContactService = Depends(ContactService.get_dependency),
):
    result = await contact_actions.get_incoming_requests(contact_service, seller_id)
    return respond(result)
