import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends
from sqlalchemy.orm import selectinload
from sqlmodel import desc, or_

from app.api.dependencies import get_identity
from app.db.row_store import RowStore
from app.models.contact_request_model import ContactRequest
from app.models.enums.contact_request_status import ContactRequestStatus
from app.models.enums.listing_status import ListingStatus
from app.models.listing_model import Listing
from app.schemas.listing_schema import (
    FeaturedQuery,
    ListingCreate,
    ListingDetails,
    ListingQueryParameters,
    ListingRead,
    ListingUpdate,
)
from app.services.auth.guards import require_auth_with_id
from app.services.auth.identity import Identity
from app.services.exceptions import NotFoundError
from app.services.validators import parse_id, validate_input

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"
# cannot be cleared by an update
REQUIRED_FIELDS = {"title", "price", "category", "listing_status"}


def escape_like(term: str) -> str:
    """Make ``%`` and ``_`` in a search term match literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class ListingService:
    def __init__(self, store: RowStore, identity: Identity) -> None:
        self.store = store
        self.identity = identity

    async def get_listings(self, **filters: Any) -> list[Listing]:
        """
        Browse listings, newest first.

        Only active listings are returned unless ``listing_status`` is given.
        Hidden listings are only ever returned to their owner.
        ``search`` matches title, description and brand, case-insensitively.
        """
        query = validate_input(ListingQueryParameters, **filters)

        status = query.listing_status or ListingStatus.ACTIVE
        conditions = [Listing.listing_status == status]
        if status == ListingStatus.HIDDEN:
            conditions.append(Listing.user_id == self.identity.id)
        if query.category:
            conditions.append(Listing.category == query.category)
        if query.min_price is not None:
            conditions.append(Listing.price >= query.min_price)
        if query.max_price is not None:
            conditions.append(Listing.price <= query.max_price)
        if query.condition is not None:
            conditions.append(Listing.condition == query.condition)
        if query.brand:
            conditions.append(Listing.brand == query.brand)
        if query.user_id is not None:
            conditions.append(Listing.user_id == query.user_id)
        if query.search:
            pattern = f"%{escape_like(query.search)}%"
            conditions.append(
                or_(
                    Listing.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Listing.description.ilike(pattern, escape=LIKE_ESCAPE),
                    Listing.brand.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        return await self.store.select_all(
            Listing,
            *conditions,
            order_by=[desc(Listing.created_at)],
            limit=query.limit,
            offset=query.offset,
        )

    async def get_listing_by_id(self, listing_id: Any) -> Listing:
        listing_id = parse_id(listing_id, "listing ID")
        listing = await self.store.select_one(
            Listing, Listing.id == listing_id, options=[selectinload(Listing.seller)]
        )
        # hidden listings only exist for their owner
        if listing is None or (
            listing.listing_status == ListingStatus.HIDDEN
            and listing.user_id != self.identity.id
        ):
            raise NotFoundError("Listing not found")
        return listing

    async def get_listing_details(self, listing_id: Any) -> ListingDetails:
        listing = await self.get_listing_by_id(listing_id)
        is_owner = listing.user_id == self.identity.id
        seller = listing.seller

        seller_phone = None
        if seller is not None and (is_owner or await self._contact_accepted(listing)):
            seller_phone = seller.phone

        return ListingDetails(
            listing=ListingRead.model_validate(listing, from_attributes=True),
            is_owner=is_owner,
            seller_phone=seller_phone,
            seller_name=seller.display_name if seller else "Unknown Seller",
            seller_verified=bool(seller and seller.is_verified),
        )

    async def get_featured_listings(self, limit: Any = None) -> list[Listing]:
        query = validate_input(
            FeaturedQuery, **({} if limit is None else {"limit": limit})
        )
        return await self.store.select_all(
            Listing,
            Listing.listing_status == ListingStatus.ACTIVE,
            order_by=[desc(Listing.created_at)],
            limit=query.limit,
        )

    async def get_categories(self) -> list[str]:
        listings = await self.store.select_all(
            Listing, Listing.listing_status == ListingStatus.ACTIVE
        )
        return sorted({listing.category for listing in listings})

    async def get_user_listings(self, user_id: Any) -> list[Listing]:
        """All listings of the caller, in every status."""
        user_id = parse_id(user_id, "user ID")
        require_auth_with_id(self.identity.id, user_id)

        return await self.store.select_all(
            Listing, Listing.user_id == user_id, order_by=[desc(Listing.created_at)]
        )

    async def create_listing(self, **fields: Any) -> Listing:
        """Create a listing owned by the caller."""
        data = validate_input(ListingCreate, **fields)
        listing = await self.store.insert(
            Listing.model_validate(data.model_dump() | {"user_id": self.identity.id})
        )
        logger.info("Listing %s created by %s", listing.id, listing.user_id)
        return listing

    async def update_listing(self, listing_id: Any, **changes: Any) -> Listing:
        """
        Change fields of one of the caller's listings.

        :raises NotFoundError: unknown listing, or someone else's hidden one.
        :raises AuthorizationError: the caller does not own the listing.
        """
        data = validate_input(ListingUpdate, **changes)
        listing = await self.get_listing_by_id(listing_id)
        require_auth_with_id(self.identity.id, listing.user_id)

        # a listing cannot lose its required fields
        values = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in REQUIRED_FIELDS
        }
        if not values:
            return listing

        values["updated_at"] = datetime.now(timezone.utc)
        await self.store.update_where(Listing, Listing.id == listing.id, values=values)
        return await self.get_listing_by_id(listing.id)

    async def hide_listing(self, listing_id: Any) -> Listing:
        listing = await self.get_listing_by_id(listing_id)
        require_auth_with_id(self.identity.id, listing.user_id)

        if listing.listing_status != ListingStatus.HIDDEN:
            await self.store.update_where(
                Listing,
                Listing.id == listing.id,
                values={
                    "listing_status": ListingStatus.HIDDEN,
                    "updated_at": datetime.now(timezone.utc),
                },
            )
            logger.info("Listing %s hidden by its owner", listing.id)

        return await self.get_listing_by_id(listing.id)

    async def _contact_accepted(self, listing: Listing) -> bool:
        request = await self.store.select_one(
            ContactRequest,
            ContactRequest.listing_id == listing.id,
            ContactRequest.buyer_id == self.identity.id,
            ContactRequest.status == ContactRequestStatus.ACCEPTED,
        )
        return request is not None

    @classmethod
    async def get_dependency(
        cls,
        store: RowStore = Depends(RowStore.get_dependency),
        identity: Identity = Depends(get_identity),
    ) -> "ListingService":
        return cls(store, identity)
