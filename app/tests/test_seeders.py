import pytest
from sqlmodel import select

from app.models.listing_model import Listing
from app.models.profile_model import Profile
from app.seeders.seed_marketplace import DEMO_LISTINGS, SELLER_ID, seed_marketplace


@pytest.mark.asyncio
async def test_seed_marketplace(session):
    added = await seed_marketplace(session, extra_listings=5)
    assert added == len(DEMO_LISTINGS) + 5

    seller = (await session.execute(select(Profile).where(Profile.id == SELLER_ID))).scalar_one()
    assert seller.is_verified is True

    listings = (await session.execute(select(Listing))).scalars().all()
    assert len(listings) == added
    assert all(listing.price > 0 for listing in listings)

    # running it again does not duplicate anything
    assert await seed_marketplace(session) == 0
