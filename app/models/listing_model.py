from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import TIMESTAMP, Column, func
from sqlmodel import Field, Relationship

from app.schemas.listing_schema import ListingBase

if TYPE_CHECKING:
    from .profile_model import Profile


class Listing(ListingBase, table=True):
    __tablename__ = "listings"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    # owner of the listing, the seller
    user_id: UUID = Field(foreign_key="profiles.id", index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(
            TIMESTAMP(timezone=True),
            nullable=True,
            server_default=func.now(),
            onupdate=func.now(),
        ),
    )

    # Relationships
    seller: Optional["Profile"] = Relationship()
