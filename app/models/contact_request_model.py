from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import TIMESTAMP, Column, UniqueConstraint, func
from sqlmodel import Field, Relationship

from app.models.enums.contact_request_status import ContactRequestStatus
from app.schemas.contact_request_schema import ContactRequestBase

if TYPE_CHECKING:
    from .listing_model import Listing
    from .profile_model import Profile


class ContactRequest(ContactRequestBase, table=True):
    __tablename__ = "contact_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    listing_id: UUID = Field(foreign_key="listings.id", index=True)
    seller_id: UUID = Field(foreign_key="profiles.id", index=True)
    buyer_id: UUID = Field(foreign_key="profiles.id")
    status: ContactRequestStatus = Field(default=ContactRequestStatus.PENDING)

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
    listing: Optional["Listing"] = Relationship()
    buyer: Optional["Profile"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[ContactRequest.buyer_id]"},
    )

    # one request per buyer and listing
    __table_args__ = (
        UniqueConstraint("listing_id", "buyer_id", name="uix_contact_listing_buyer"),
    )
