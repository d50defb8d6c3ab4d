"""Partner pairing via invitation codes."""

import logging

from sqlalchemy import Select, select

from partner_status.models.status import Status
from partner_status.models.user import User
from partner_status.services.base import BaseService, InvalidOperationError, NotFoundError
from partner_status.services.statuses import find_active_status

logger = logging.getLogger(__name__)


def lock_users_in_order(user_ids: list[str]) -> Select[tuple[User]]:
    """Row-lock several users in id order so crossed requests cannot deadlock."""
    return select(User).where(User.id.in_(user_ids)).order_by(User.id).with_for_update()


class PairingService(BaseService):
    """Links two users as partners."""

    async def connect(self, user_id: str, invitation_code: str) -> User:
        """Pair a user with the owner of an invitation code.

        Both ``partner_id`` fields are written in the same transaction.
        Re-pairing overwrites an existing partnership; the previous partner
        keeps pointing at this user.

        Raises:
            NotFoundError: If the user or the invitation code is unknown
            InvalidOperationError: If the code belongs to the user
        """
        result = await self.db.execute(
            select(User.id).where(User.invitation_code == invitation_code)
        )
        partner_id = result.scalar_one_or_none()

        lock_ids = [user_id] if partner_id is None else [user_id, partner_id]
        result = await self.db.execute(lock_users_in_order(lock_ids))
        locked = {row.id: row for row in result.scalars()}

        user = locked.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        partner = locked.get(partner_id)
        if partner is None:
            raise NotFoundError("Invalid invitation code")
        if partner.id == user.id:
            raise InvalidOperationError("Cannot connect to yourself")

        for side, new_partner in ((user, partner), (partner, user)):
            if side.partner_id is not None and side.partner_id != new_partner.id:
                logger.warning(
                    "User %s re-paired from %s to %s; previous partner link left in place",
                    side.id,
                    side.partner_id,
                    new_partner.id,
                )

        user.partner_id = partner.id
        partner.partner_id = user.id
        await self.db.flush()

        logger.info("Paired users %s and %s", user.id, partner.id)
        return user

    async def get_partner(self, user_id: str) -> tuple[User, Status | None]:
        """Return the user's partner and the partner's active status.

        Raises:
            NotFoundError: If the user is unknown, unpaired, or the partner is gone
        """
        user = await self._find_user(user_id)
        if user is None or user.partner_id is None:
            raise NotFoundError("Partner not found")

        partner = await self._find_user(user.partner_id)
        if partner is None:
            raise NotFoundError("Partner not found")

        return partner, await find_active_status(self.db, partner.id)
