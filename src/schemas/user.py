"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserUpdate(BaseModel):
    """Update a user. Omitted, null or empty fields keep their stored value."""

    model_config = ConfigDict(populate_by_name=True)

    display_name: str | None = Field(None, alias="UserName", max_length=255)
    phone_number: str | None = Field(None, alias="phoneNumber", max_length=50)
    address: str | None = Field(None, max_length=500)


class UserResponse(BaseModel):
    """User as returned to clients. The password digest is never included."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    email: str
    display_name: str | None = Field(None, alias="UserName")
    phone_number: str | None = Field(None, alias="phoneNumber")
    address: str | None = None
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class UserUpdateResponse(MessageResponse):
    user: UserResponse
