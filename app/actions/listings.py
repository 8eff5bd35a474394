from typing import Any

from app.actions.results import action
from app.models.listing_model import Listing
from app.schemas.listing_schema import ListingDetails, ListingRead
from app.services.listing.listing_service import ListingService


def _read_all(listings: list[Listing]) -> list[ListingRead]:
    return [ListingRead.model_validate(listing, from_attributes=True) for listing in listings]


@action
async def get_listings(service: ListingService, **filters: Any) -> list[ListingRead]:
    return _read_all(await service.get_listings(**filters))


@action
async def get_listing_details(service: ListingService, listing_id: Any) -> ListingDetails:
    return await service.get_listing_details(listing_id)


@action
async def get_featured_listings(
    service: ListingService, limit: Any = None
) -> list[ListingRead]:
    return _read_all(await service.get_featured_listings(limit))


@action
async def get_categories(service: ListingService) -> list[str]:
    return await service.get_categories()


@action
async def get_user_listings(service: ListingService, user_id: Any) -> list[ListingRead]:
    return _read_all(await service.get_user_listings(user_id))


@action
async def hide_listing(service: ListingService, listing_id: Any) -> ListingRead:
    listing = await service.hide_listing(listing_id)
    return ListingRead.model_validate(listing, from_attributes=True)


@action
async def create_listing(service: ListingService, **fields: Any) -> ListingRead:
    listing = await service.create_listing(**fields)
    return ListingRead.model_validate(listing, from_attributes=True)


@action
async def update_listing(
    service: ListingService, listing_id: Any, **changes: Any
) -> ListingRead:
    listing = await service.update_listing(listing_id, **changes)
    return ListingRead.model_validate(listing, from_attributes=True)
