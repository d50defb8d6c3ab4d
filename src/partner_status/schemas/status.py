"""Pydantic schemas for status and live-channel payloads."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import Field, field_validator

from partner_status.models.status import StatusType
from partner_status.schemas.base import CamelModel


class StatusCreate(CamelModel):
    """Schema for setting a new status.

    For preset types only ``message`` and ``expires_at`` are honoured; the
    presentation fields come from the preset table. Length limits on the
    custom fields are checked by the service, only for custom statuses.
    """

    user_id: str = Field(min_length=1, description="ID of the user setting the status")
    type: StatusType = Field(description="Status type")
    title: str | None = Field(default=None, description="Title (custom only)")
    message: str | None = Field(default=None, max_length=500, description="Optional message")
    icon: str | None = Field(default=None, description="Icon name (custom only)")
    color: str | None = Field(default=None, description="Color (custom only)")
    expires_at: datetime | None = Field(default=None, description="Advisory expiry time")

    @field_validator("expires_at")
    @classmethod
    def normalize_expires_at(cls, v: datetime | None) -> datetime | None:
        """Store expiry as naive UTC."""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v


class StatusResponse(CamelModel):
    """Response schema for a status."""

    id: str = Field(description="Status ID")
    user_id: str = Field(description="Owning user ID")
    type: StatusType = Field(description="Status type")
    title: str = Field(description="Title")
    message: str | None = Field(default=None, description="Message")
    icon: str = Field(description="Icon name")
    color: str = Field(description="Color")
    expires_at: datetime | None = Field(default=None, description="Advisory expiry time")
    is_active: bool = Field(description="Whether this is the user's current status")
    created_at: datetime = Field(description="When the status was set")


class ActivityEntry(StatusResponse):
    """A status in the merged activity feed."""

    is_own_status: bool = Field(description="Whether the status belongs to the requesting user")


class LiveAuthMessage(CamelModel):
    """Client -> server: bind this connection to a user."""

    type: Literal["auth"]
    user_id: str = Field(min_length=1, max_length=36)


class StatusUpdateMessage(CamelModel):
    """Server -> client: the partner changed status."""

    type: Literal["statusUpdate"] = "statusUpdate"
    status: StatusResponse
    user_id: str
