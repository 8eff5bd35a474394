from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StrictInt
from sqlmodel import Field, SQLModel

from app.models.enums.transaction_status import TransactionStatus


class TransactionBase(SQLModel):
    model_config = ConfigDict(extra="forbid")
    buyer_id: UUID
    seller_id: UUID
    listing_id: UUID
    # whole rand, no minor units
    amount: int = Field(gt=0)


class TransactionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    buyer_id: UUID
    seller_id: UUID
    listing_id: UUID
    # floats, numeric strings and bools are rejected
    amount: StrictInt = Field(gt=0)


class TransactionRead(TransactionBase):
    id: UUID
    status: TransactionStatus
    created_at: datetime
    updated_at: datetime | None = None


class TransactionStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    transaction_id: UUID
    status: TransactionStatus
