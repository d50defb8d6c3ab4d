"""Merged activity feed of a user and their partner."""

from typing import NamedTuple

from partner_status.models.status import Status
from partner_status.services.base import BaseService
from partner_status.services.statuses import StatusService


class ActivityItem(NamedTuple):
    status: Status
    is_own_status: bool


class ActivityService(BaseService):
    """Builds the activity feed shown on the home screen."""

    async def get_activity(self, user_id: str) -> list[ActivityItem]:
        """Return the user's and partner's statuses, most recent first.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self._get_user(user_id)
        statuses = StatusService(self.db)

        items = [ActivityItem(s, True) for s in await statuses.list_statuses(user.id)]
        if user.partner_id is not None:
            items += [ActivityItem(s, False) for s in await statuses.list_statuses(user.partner_id)]

        # sorted() is stable, so ties keep their fetch order
        return sorted(items, key=lambda item: item.status.created_at, reverse=True)
