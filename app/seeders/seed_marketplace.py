import asyncio
import random
from uuid import UUID

from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.db.database import async_session, init_db
from app.models.enums.item_condition import ItemCondition
from app.models.listing_model import Listing
from app.models.profile_model import Profile

fake = Faker()
NUM_EXTRA_LISTINGS = 10
CATEGORIES = ["Hiking", "Cycling", "Camping", "Climbing", "Water Sports", "Running"]

# fixed ids so the demo accounts can be mapped to auth users
SELLER_ID = UUID("5f1c7a52-3c7e-4d2b-9a44-1f0d6c2b8e01")
SECOND_SELLER_ID = UUID("5f1c7a52-3c7e-4d2b-9a44-1f0d6c2b8e02")
BUYER_ID = UUID("5f1c7a52-3c7e-4d2b-9a44-1f0d6c2b8e03")

DEMO_PROFILES = [
    dict(
        id=SELLER_ID,
        display_name="Sarah Seller",
        phone="+27823334444",
        is_verified=True,
    ),
    dict(
        id=SECOND_SELLER_ID,
        display_name="Mike Mountain",
        phone="+27825556666",
        allow_whatsapp=False,
    ),
    dict(id=BUYER_ID, display_name="John Buyer", phone="+27821112222"),
]

DEMO_LISTINGS = [
    dict(
        user_id=SELLER_ID,
        title="Trail Running Shoes",
        description="Lightweight trail runners perfect for mountain terrain.",
        price=1200,
        category="Hiking",
        sub_category="Footwear",
        brand="Salomon",
        model="Speedcross 5",
        condition=ItemCondition.SLIGHTLY_USED,
        retail_price=2400,
        discount_percent=50,
    ),
    dict(
        user_id=SECOND_SELLER_ID,
        title="Mountain Bike",
        description="Full suspension mountain bike, great for trails.",
        price=15000,
        category="Cycling",
        sub_category="Mountain Bikes",
        brand="Giant",
        model="Trance X",
        condition=ItemCondition.SLIGHTLY_USED,
        retail_price=30000,
        discount_percent=50,
    ),
    dict(
        user_id=SELLER_ID,
        title="Hiking Backpack 65L",
        description="Large capacity backpack for multi-day hikes.",
        price=800,
        category="Hiking",
        sub_category="Backpacks",
        brand="Osprey",
        model="Atmos AG 65",
        condition=ItemCondition.NEW,
        retail_price=1600,
        discount_percent=50,
    ),
]


def fake_listing(user_id: UUID) -> Listing:
    retail_price = random.randint(500, 20000)
    discount = random.choice([10, 25, 40, 50])
    return Listing(
        user_id=user_id,
        title=fake.catch_phrase()[:255],
        description=fake.paragraph(),
        price=max(1, retail_price * (100 - discount) // 100),
        category=random.choice(CATEGORIES),
        brand=fake.company()[:100],
        condition=random.choice(list(ItemCondition)),
        retail_price=retail_price,
        discount_percent=discount,
    )


async def seed_marketplace(
    session: AsyncSession, extra_listings: int = NUM_EXTRA_LISTINGS
) -> int:
    """Insert the demo profiles and listings. Returns the number of listings added."""
    result = await session.execute(select(Profile).where(Profile.id == SELLER_ID))
    if result.scalar_one_or_none():
        print("Demo profiles already exist. Skipping.")
        return 0

    session.add_all(Profile(**data) for data in DEMO_PROFILES)
    listings = [Listing(**data) for data in DEMO_LISTINGS]
    listings += [
        fake_listing(random.choice([SELLER_ID, SECOND_SELLER_ID]))
        for _ in range(extra_listings)
    ]
    session.add_all(listings)
    await session.commit()
    print(f"Seeded {len(DEMO_PROFILES)} profiles and {len(listings)} listings")
    return len(listings)


async def main():
    await init_db()
    async with async_session() as session:
        await seed_marketplace(session)


if __name__ == "__main__":
    asyncio.run(main())
