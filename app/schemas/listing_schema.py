from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator
from sqlmodel import Field, SQLModel

from app.core.config import config
from app.models.enums.item_condition import ItemCondition
from app.models.enums.listing_status import ListingStatus


# Basic schema for listing data
class ListingBase(SQLModel):
    model_config = ConfigDict(extra="forbid")
    title: str = Field(max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    # sale price in ZAR
    price: int = Field(gt=0)
    category: str = Field(max_length=100)
    sub_category: str | None = Field(default=None, max_length=100)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    condition: ItemCondition | None = None
    retail_price: int | None = Field(default=None, ge=0)
    discount_percent: int | None = Field(default=None, ge=0, le=100)
    product_link: str | None = Field(default=None, max_length=2048)
    listing_status: ListingStatus = Field(default=ListingStatus.ACTIVE)


class ListingCreate(ListingBase):
    pass


# every field optional, only the ones sent are changed
class ListingUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    price: int | None = Field(default=None, gt=0)
    category: str | None = Field(default=None, max_length=100)
    sub_category: str | None = Field(default=None, max_length=100)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    condition: ItemCondition | None = None
    retail_price: int | None = Field(default=None, ge=0)
    discount_percent: int | None = Field(default=None, ge=0, le=100)
    product_link: str | None = Field(default=None, max_length=2048)
    listing_status: ListingStatus | None = None


class ListingRead(ListingBase):
    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime | None = None


class ListingDetails(BaseModel):
    listing: ListingRead
    is_owner: bool
    # owner, or a buyer whose contact request was accepted
    seller_phone: str | None = None
    seller_name: str
    seller_verified: bool


class ListingQueryParameters(BaseModel):
    category: str | None = None
    min_price: int | None = Field(default=None, ge=0)
    max_price: int | None = Field(default=None, ge=0)
    condition: ItemCondition | None = None
    brand: str | None = Field(default=None, max_length=100)
    listing_status: ListingStatus | None = None
    user_id: UUID | None = None
    search: str | None = Field(default=None, max_length=255)
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_price_range(self):
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price cannot be greater than max_price")
        return self


class FeaturedQuery(BaseModel):
    limit: int = Field(default=config.featured_listings_limit, ge=1, le=50)
