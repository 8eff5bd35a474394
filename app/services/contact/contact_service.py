import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import selectinload
from sqlmodel import desc

from app.api.dependencies import get_identity
from app.db.row_store import RowStore
from app.models.contact_request_model import ContactRequest
from app.models.enums.contact_request_status import ContactRequestStatus
from app.models.enums.listing_status import ListingStatus
from app.models.listing_model import Listing
from app.models.profile_model import Profile
from app.schemas.contact_request_schema import (
    ContactRequestCreate,
    ContactRequestStatusUpdate,
    ContactStatus,
    IncomingRequest,
)
from app.services.auth.guards import PartyRole, require_auth_with_id, require_party
from app.services.auth.identity import Identity
from app.services.exceptions import (
    ConstraintViolationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from app.services.validators import parse_id, validate_input

logger = logging.getLogger(__name__)

# accepted and declined are terminal
CONTACT_TRANSITIONS: dict[ContactRequestStatus, set[ContactRequestStatus]] = {
    ContactRequestStatus.PENDING: {
        ContactRequestStatus.ACCEPTED,
        ContactRequestStatus.DECLINED,
    },
}


class ContactService:
    """
    Gate between a buyer and a seller's phone number.

    A buyer asks for contact once per listing; the seller accepts or declines.
    The phone number is only ever handed out for accepted requests.
    """

    def __init__(self, store: RowStore, identity: Identity) -> None:
        self.store = store
        self.identity = identity

    async def request_contact(
        self,
        listing_id: Any,
        seller_id: Any,
        buyer_id: Any,
        message: str | None = None,
    ) -> ContactRequest:
        """
        Create a pending contact request, or return the one that already
        exists for this buyer and listing.

        :raises ValidationError: malformed ids, message too long, the seller
            does not own the listing, or the buyer owns it.
        :raises AuthorizationError: if the caller is not the buyer.
        :raises NotFoundError: if the listing does not exist.
        """
        data = validate_input(
            ContactRequestCreate,
            listing_id=listing_id,
            seller_id=seller_id,
            buyer_id=buyer_id,
            message=message or None,
        )
        require_auth_with_id(self.identity.id, data.buyer_id)

        existing = await self._find_request(data.listing_id, data.buyer_id)
        if existing is not None:
            return existing

        listing = await self.store.select_one(Listing, Listing.id == data.listing_id)
        if listing is None:
            raise NotFoundError("Listing not found")
        if listing.user_id != data.seller_id:
            raise ValidationError("Seller does not own this listing")
        if listing.user_id == data.buyer_id:
            raise ValidationError("You cannot request contact for your own listing")
        if listing.listing_status != ListingStatus.ACTIVE:
            raise ValidationError("Listing is no longer available")

        try:
            request = await self.store.insert(
                ContactRequest.model_validate(data.model_dump())
            )
        except ConstraintViolationError:
            # a concurrent request for the same buyer and listing got in first
            existing = await self._find_request(data.listing_id, data.buyer_id)
            if existing is None:
                raise
            return existing

        logger.info(
            "Contact request %s created for listing %s", request.id, request.listing_id
        )
        return request

    async def get_contact_status(self, listing_id: Any, buyer_id: Any) -> ContactStatus:
        listing_id = parse_id(listing_id, "listing ID")
        buyer_id = parse_id(buyer_id, "buyer ID")
        require_auth_with_id(self.identity.id, buyer_id)

        request = await self._find_request(listing_id, buyer_id)
        if request is None:
            return ContactStatus()

        seller_phone = None
        if request.status == ContactRequestStatus.ACCEPTED:
            seller = await self.store.select_one(
                Profile, Profile.id == request.seller_id
            )
            seller_phone = seller.phone if seller else None

        return ContactStatus(
            status=request.status,
            request_id=request.id,
            seller_phone=seller_phone,
        )

    async def update_contact_status(
        self, request_id: Any, new_status: Any
    ) -> ContactRequest:
        """
        Accept or decline a pending request. Only the seller may do this.

        :raises NotFoundError: unknown request.
        :raises AuthorizationError: the caller is not the request's seller.
        :raises InvalidTransitionError: the request is no longer pending or
            ``new_status`` is not accepted/declined.
        """
        data = validate_input(
            ContactRequestStatusUpdate, request_id=request_id, status=new_status
        )

        request = await self.store.select_one(
            ContactRequest, ContactRequest.id == data.request_id
        )
        if request is None:
            raise NotFoundError("Request not found")
        require_party(self.identity.id, request, PartyRole.SELLER)

        current = request.status
        if data.status not in CONTACT_TRANSITIONS.get(current, set()):
            raise InvalidTransitionError(
                f"Cannot change a {current.value} request to {data.status.value}"
            )

        changed = await self.store.update_where(
            ContactRequest,
            ContactRequest.id == request.id,
            ContactRequest.status == current,
            values={"status": data.status, "updated_at": datetime.now(timezone.utc)},
        )
        if not changed:
            raise InvalidTransitionError(
                "Request was updated by someone else, reload and try again"
            )

        logger.info(
            "Contact request %s changed %s -> %s",
            request.id,
            current.value,
            data.status.value,
        )
        return await self.store.select_one(
            ContactRequest, ContactRequest.id == request.id
        )

    async def list_seller_requests(self, seller_id: Any) -> list[ContactRequest]:
        seller_id = parse_id(seller_id, "seller ID")
        require_auth_with_id(self.identity.id, seller_id)

        return await self.store.select_all(
            ContactRequest,
            ContactRequest.seller_id == seller_id,
            order_by=[desc(ContactRequest.created_at)],
        )

    async def list_incoming_requests(self, seller_id: Any) -> list[IncomingRequest]:
        """Seller dashboard view of requests, with buyer and listing details."""
        seller_id = parse_id(seller_id, "seller ID")
        require_auth_with_id(self.identity.id, seller_id)

        requests = await self.store.select_all(
            ContactRequest,
            ContactRequest.seller_id == seller_id,
            order_by=[desc(ContactRequest.created_at)],
            options=[
                selectinload(ContactRequest.buyer),
                selectinload(ContactRequest.listing),
            ],
        )
        return [
            IncomingRequest(
                id=request.id,
                buyer_name=request.buyer.display_name if request.buyer else "Unknown",
                buyer_verified=bool(request.buyer and request.buyer.is_verified),
                message=request.message,
                listing_title=request.listing.title if request.listing else "",
                listing_id=request.listing_id,
                status=request.status,
                created_at=request.created_at,
            )
            for request in requests
        ]

    async def _find_request(
        self, listing_id: UUID, buyer_id: UUID
    ) -> ContactRequest | None:
        return await self.store.select_one(
            ContactRequest,
            ContactRequest.listing_id == listing_id,
            ContactRequest.buyer_id == buyer_id,
        )

    @classmethod
    async def get_dependency(
        cls,
        store: RowStore = Depends(RowStore.get_dependency),
        identity: Identity = Depends(get_identity),
    ) -> "ContactService":
        return cls(store, identity)
