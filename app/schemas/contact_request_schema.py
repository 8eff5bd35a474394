from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from sqlmodel import Field, SQLModel

from app.core.config import config
from app.models.enums.contact_request_status import ContactRequestStatus


class ContactRequestBase(SQLModel):
    model_config = ConfigDict(extra="forbid")
    listing_id: UUID
    seller_id: UUID
    buyer_id: UUID
    message: str | None = Field(
        default=None, max_length=config.contact_message_max_length
    )


class ContactRequestCreate(ContactRequestBase):
    pass


class ContactRequestRead(ContactRequestBase):
    id: UUID
    status: ContactRequestStatus
    created_at: datetime
    updated_at: datetime | None = None


class ContactRequestStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    request_id: UUID
    status: ContactRequestStatus


# what a buyer sees for a listing; seller_phone stays None until accepted
class ContactStatus(BaseModel):
    status: ContactRequestStatus | None = None
    request_id: UUID | None = None
    seller_phone: str | None = None


# seller dashboard row
class IncomingRequest(BaseModel):
    id: UUID
    buyer_name: str
    buyer_verified: bool
    message: str | None
    listing_title: str
    listing_id: UUID
    status: ContactRequestStatus
    created_at: datetime
