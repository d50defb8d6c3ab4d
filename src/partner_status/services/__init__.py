"""Business logic for accounts, pairing, statuses and live updates."""

from partner_status.services.activity import ActivityItem, ActivityService
from partner_status.services.base import (
    AuthError,
    BaseService,
    InvalidOperationError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from partner_status.services.notifier import (
    ConnectionRegistry,
    LiveNotifier,
    LiveSession,
    SessionState,
)
from partner_status.services.pairing import PairingService
from partner_status.services.statuses import StatusService
from partner_status.services.users import UserService

__all__ = [
    "ActivityItem",
    "ActivityService",
    "AuthError",
    "BaseService",
    "ConnectionRegistry",
    "InvalidOperationError",
    "LiveNotifier",
    "LiveSession",
    "NotFoundError",
    "PairingService",
    "ServiceError",
    "SessionState",
    "StatusService",
    "UserService",
    "ValidationError",
]
