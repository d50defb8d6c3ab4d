"""FastAPI dependency providers for services and the live registry."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import HTTPConnection

from partner_status.database import get_db
from partner_status.services.activity import ActivityService
from partner_status.services.notifier import ConnectionRegistry, LiveNotifier
from partner_status.services.pairing import PairingService
from partner_status.services.statuses import StatusService
from partner_status.services.users import UserService


def get_connection_registry(connection: HTTPConnection) -> ConnectionRegistry:
    """Return the registry owned by the running application."""
    return connection.app.state.connections


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_pairing_service(db: AsyncSession = Depends(get_db)) -> PairingService:
    return PairingService(db)


def get_status_service(
    db: AsyncSession = Depends(get_db),
    registry: ConnectionRegistry = Depends(get_connection_registry),
) -> StatusService:
    return StatusService(db, notifier=LiveNotifier(registry))


def get_activity_service(db: AsyncSession = Depends(get_db)) -> ActivityService:
    return ActivityService(db)
