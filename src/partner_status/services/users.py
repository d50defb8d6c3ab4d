"""Account registration, login and profile updates."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from partner_status.config import get_settings
from partner_status.database import utc_now
from partner_status.models.user import User
from partner_status.services.base import AuthError, BaseService, ValidationError
from partner_status.services.statuses import StatusService
from partner_status.utils.security import (
    generate_invitation_code,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """User account operations."""

    async def register(self, name: str, username: str, password: str) -> User:
        """Create an account with a unique invitation code and a "free" status.

        The username and code checks are repeated if the insert loses a race
        against a concurrent registration.

        Raises:
            ValidationError: If the username is taken
        """
        hashed_password = hash_password(password)

        while True:
            if await self._username_taken(username):
                raise ValidationError("Username already exists")

            code = await self._unused_invitation_code()
            user = User(
                name=name,
                username=username,
                hashed_password=hashed_password,
                invitation_code=code,
                created_at=utc_now(),
            )
            try:
                async with self.db.begin_nested():
                    self.db.add(user)
                    await self.db.flush()
            except IntegrityError:
                if await self._username_taken(username):
                    raise ValidationError("Username already exists") from None
                if not await self._code_taken(code):
                    raise
                logger.debug("Invitation code %s taken concurrently, retrying", code)
                continue
            break

        await StatusService(self.db).create_initial_status(user)
        await self.db.refresh(user)

        logger.info("Registered user %s (%s)", user.id, user.username)
        return user

    async def _username_taken(self, username: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.username == username))
        return result.scalar_one_or_none() is not None

    async def _code_taken(self, code: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.invitation_code == code))
        return result.scalar_one_or_none() is not None

    async def _unused_invitation_code(self) -> str:
        # Collisions are rare in a 36^8 space; retry until free
        while True:
            code = generate_invitation_code()
            if not await self._code_taken(code):
                return code
            logger.debug("Invitation code collision, retrying")

    async def authenticate(self, username: str, password: str) -> User:
        """Check credentials.

        Raises:
            AuthError: If the user is unknown, has no password, or the password is wrong
        """
        result = await self.db.execute(select(User).where(User.username == username.lower()))
        user = result.scalar_one_or_none()

        if not user or not user.hashed_password:
            raise AuthError()
        if not verify_password(password, user.hashed_password):
            raise AuthError()
        return user

    async def get_user(self, user_id: str) -> User:
        return await self._get_user(user_id)

    async def update_profile_picture(self, user_id: str, profile_picture: str) -> User:
        """Replace the profile picture; an empty value removes it.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the picture exceeds the configured size
        """
        user = await self._get_user(user_id)

        max_length = get_settings().profile_picture_max_length
        if len(profile_picture) > max_length:
            raise ValidationError(f"Profile picture exceeds {max_length} characters")

        user.profile_picture = profile_picture or None
        await self.db.flush()
        return user
