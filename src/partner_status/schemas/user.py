"""Pydantic schemas for user, pairing and authentication API endpoints."""

import re
from datetime import datetime

from pydantic import Field, field_validator

from partner_status.schemas.base import CamelModel
from partner_status.schemas.status import StatusResponse

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class UserCreate(CamelModel):
    """Schema for user registration."""

    name: str = Field(min_length=1, max_length=100, description="Display name")
    username: str = Field(
        min_length=3,
        max_length=50,
        description="Unique username (3-50 characters)",
    )
    password: str = Field(
        min_length=6,
        max_length=100,
        description="Password (6-100 characters)",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that are only whitespace."""
        v = v.strip()
        if not v:
            msg = "Name is required"
            raise ValueError(msg)
        return v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username contains only allowed characters."""
        if not USERNAME_PATTERN.fullmatch(v):
            msg = "Username can only contain ASCII letters, digits, underscores and hyphens"
            raise ValueError(msg)
        return v.lower()


class UserLogin(CamelModel):
    """Schema for user login request."""

    username: str = Field(min_length=1, description="Username")
    password: str = Field(min_length=1, description="Password")


class UserResponse(CamelModel):
    """Response schema for user data (excludes password)."""

    id: str = Field(description="User ID")
    name: str = Field(description="Display name")
    username: str | None = Field(default=None, description="Username")
    invitation_code: str = Field(description="Code a partner uses to pair with this user")
    partner_id: str | None = Field(default=None, description="Partner's user ID")
    profile_picture: str | None = Field(default=None, description="Data URI or URL")
    created_at: datetime = Field(description="When the user was created")


class PartnerResponse(UserResponse):
    """Partner profile together with their active status."""

    current_status: StatusResponse | None = Field(
        default=None, description="Partner's active status"
    )


class ProfilePictureUpdate(CamelModel):
    """Schema for replacing a profile picture. An empty string clears it."""

    profile_picture: str = Field(description="Data URI or URL")


class ConnectRequest(CamelModel):
    """Schema for pairing with another user."""

    invitation_code: str = Field(min_length=1, max_length=32, description="Partner's code")
