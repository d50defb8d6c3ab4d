"""Pydantic schemas for request/response validation."""

from partner_status.schemas.status import (
    ActivityEntry,
    LiveAuthMessage,
    StatusCreate,
    StatusResponse,
    StatusUpdateMessage,
)
from partner_status.schemas.user import (
    ConnectRequest,
    PartnerResponse,
    ProfilePictureUpdate,
    UserCreate,
    UserLogin,
    UserResponse,
)

__all__ = [
    # Status schemas
    "StatusCreate",
    "StatusResponse",
    "ActivityEntry",
    # Live channel schemas
    "LiveAuthMessage",
    "StatusUpdateMessage",
    # User schemas
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "PartnerResponse",
    "ProfilePictureUpdate",
    "ConnectRequest",
]
