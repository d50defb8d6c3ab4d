"""SQLAlchemy ORM models."""

from partner_status.models.status import Status, StatusPreset, StatusType, preset_for
from partner_status.models.user import User

__all__ = [
    "Status",
    "StatusPreset",
    "StatusType",
    "User",
    "preset_for",
]
