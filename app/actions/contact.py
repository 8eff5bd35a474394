from typing import Any

from app.actions.results import action
from app.schemas.contact_request_schema import (
    ContactRequestRead,
    ContactStatus,
    IncomingRequest,
)
from app.services.contact.contact_service import ContactService


@action
async def request_contact(
    service: ContactService,
    listing_id: Any,
    seller_id: Any,
    buyer_id: Any,
    message: str | None = None,
) -> ContactRequestRead:
    request = await service.request_contact(listing_id, seller_id, buyer_id, message)
    return ContactRequestRead.model_validate(request, from_attributes=True)


@action
async def get_contact_status(
    service: ContactService, listing_id: Any, buyer_id: Any
) -> ContactStatus:
    return await service.get_contact_status(listing_id, buyer_id)


@action
async def update_contact_status(
    service: ContactService, request_id: Any, status: Any
) -> ContactRequestRead:
    request = await service.update_contact_status(request_id, status)
    return ContactRequestRead.model_validate(request, from_attributes=True)


@action
async def get_seller_contact_requests(
    service: ContactService, seller_id: Any
) -> list[ContactRequestRead]:
    requests = await service.list_seller_requests(seller_id)
    return [
        ContactRequestRead.model_validate(request, from_attributes=True)
        for request in requests
    ]


@action
async def get_incoming_requests(
    service: ContactService, seller_id: Any
) -> list[IncomingRequest]:
    return await service.list_incoming_requests(seller_id)
