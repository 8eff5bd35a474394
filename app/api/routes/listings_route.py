from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.actions import listings as listing_actions
from app.api.responses import respond
from app.services.listing.listing_service import ListingService

router = APIRouter(prefix="/listings", tags=["Listings"])


@router.get("/", summary="Browse listings")
async def get_listings(
    category: str | None = None,
    min_price: int | None = None,
    max_price: int | None = None,
    condition: str | None = None,
    brand: str | None = None,
    listing_status: str | None = None,
    user_id: str | None = None,
    search: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    filters = {
        "category": category,
        "min_price": min_price,
        "max_price": max_price,
        "condition": condition,
        "brand": brand,
        "listing_status": listing_status,
        "user_id": user_id,
        "search": search,
        "limit": limit,
        "offset": offset,
    }
    result = await listing_actions.get_listings(
        listing_service,
        **{key: value for key, value in filters.items() if value is not None},
    )
    return respond(result)


@router.post("/", summary="Create a listing")
async def create_listing(
    fields: dict[str, Any] = Body(...),
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    # fields are validated by the service
    result = await listing_actions.create_listing(listing_service, **fields)
    return respond(result, status.HTTP_201_CREATED)


@router.get("/featured", summary="Newest active listings")
async def get_featured_listings(
    limit: int | None = None,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return respond(await listing_actions.get_featured_listings(listing_service, limit))


@router.get("/categories", summary="Categories with active listings")
async def get_categories(
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return respond(await listing_actions.get_categories(listing_service))


@router.get("/user/{user_id}", summary="Listings of the current user")
async def get_user_listings(
    user_id: str,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return respond(await listing_actions.get_user_listings(listing_service, user_id))


@router.get("/{listing_id}", summary="Listing details")
async def get_listing_details(
    listing_id: str,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return respond(await listing_actions.get_listing_details(listing_service, listing_id))


@router.post("/{listing_id}/hide", summary="Hide a listing")
async def hide_listing(
    listing_id: str,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return respond(await listing_actions.hide_listing(listing_service, listing_id))


@router.patch("/{listing_id}", summary="Edit a listing")
async def update_listing(
    listing_id: str,
    changes: dict[str, Any] = Body(...),
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    result = await listing_actions.update_listing(listing_service, listing_id, **changes)
    return respond(result)
