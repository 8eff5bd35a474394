from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import TIMESTAMP, Column, func
from sqlmodel import Field

from app.models.enums.transaction_status import TransactionStatus
from app.schemas.transaction_schema import TransactionBase


class Transaction(TransactionBase, table=True):
    __tablename__ = "transactions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    buyer_id: UUID = Field(foreign_key="profiles.id", index=True)
    seller_id: UUID = Field(foreign_key="profiles.id", index=True)
    listing_id: UUID = Field(foreign_key="listings.id")
    status: TransactionStatus = Field(default=TransactionStatus.FUNDS_SECURED)

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
