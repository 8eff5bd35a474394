from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import TIMESTAMP, Column, func
from sqlmodel import Field

from app.schemas.profile_schema import ProfileBase


class Profile(ProfileBase, table=True):
    __tablename__ = "profiles"

    # same id as the auth provider's user
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    # set by the KYC stub
    is_verified: bool = Field(default=False)

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
