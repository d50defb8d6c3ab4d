"""Service-layer errors and the shared service base class."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from partner_status.models.user import User


class ServiceError(Exception):
    """Base exception for service errors surfaced to API callers."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(ServiceError):
    """Raised when input is missing or malformed."""

    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(message, status_code=400)


class NotFoundError(ServiceError):
    """Raised when a user, status or invitation code does not exist."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class AuthError(ServiceError):
    """Raised when credentials are invalid."""

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message, status_code=401)


class InvalidOperationError(ServiceError):
    """Raised when a well-formed request asks for something not allowed."""

    def __init__(self, message: str = "Operation not allowed") -> None:
        super().__init__(message, status_code=400)


class BaseService:
    """Base class for services working on a single database session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _find_user(self, user_id: str, *, for_update: bool = False) -> User | None:
        query = select(User).where(User.id == user_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def _get_user(self, user_id: str, *, for_update: bool = False) -> User:
        """Load a user or raise NotFoundError."""
        user = await self._find_user(user_id, for_update=for_update)
        if user is None:
            raise NotFoundError("User not found")
        return user
