from datetime import datetime
from typing import Annotated
from uuid import UUID

import phonenumbers
from pydantic import BaseModel, ConfigDict
from pydantic_extra_types.phone_numbers import PhoneNumberValidator
from sqlmodel import Field, SQLModel

# numbers are stored in E.164, South Africa is assumed for local input
ProfilePhone = Annotated[
    str | phonenumbers.PhoneNumber,
    PhoneNumberValidator(default_region="ZA", number_format="E164"),
]


class ProfileBase(SQLModel):
    model_config = ConfigDict(extra="forbid")
    display_name: str = Field(min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=32)
    avatar_url: str | None = Field(default=None, max_length=2048)
    allow_whatsapp: bool = Field(default=True)


class ProfileRead(ProfileBase):
    id: UUID
    is_verified: bool
    created_at: datetime
    updated_at: datetime | None = None


class ProfileUpdate(BaseModel):
    display_name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: ProfilePhone | None = None
    allow_whatsapp: bool | None = None

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "example": {
                "display_name": "Sarah Seller",
                "phone": "+27 82 333 4444",
                "allow_whatsapp": True,
            }
        },
    }


class VerifyIdentityResult(BaseModel):
    verified: bool
