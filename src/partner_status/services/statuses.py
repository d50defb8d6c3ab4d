"""Status lifecycle: setting, reading and listing user statuses."""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from partner_status.database import utc_now
from partner_status.models.status import Status, StatusType, preset_for
from partner_status.models.user import User
from partner_status.services.base import BaseService, NotFoundError, ValidationError
from partner_status.services.notifier import LiveNotifier

logger = logging.getLogger(__name__)

# Column widths of the caller-supplied custom fields
CUSTOM_FIELD_MAX_LENGTHS = {"title": 100, "icon": 50, "color": 50}


async def find_active_status(db: AsyncSession, user_id: str) -> Status | None:
    """Return the user's active status, if any."""
    result = await db.execute(
        select(Status).where(Status.user_id == user_id, Status.is_active.is_(True))
    )
    return result.scalar_one_or_none()


class StatusService(BaseService):
    """Creates statuses, keeping at most one active status per user."""

    def __init__(self, db: AsyncSession, notifier: LiveNotifier | None = None) -> None:
        super().__init__(db)
        self.notifier = notifier

    async def set_status(
        self,
        user_id: str,
        status_type: StatusType | str,
        *,
        title: str | None = None,
        message: str | None = None,
        icon: str | None = None,
        color: str | None = None,
        expires_at: datetime | None = None,
    ) -> Status:
        """Make a new status the user's active one.

        The previous active status is deactivated and the new row inserted
        in one transaction, with the user row locked so concurrent calls for
        the same user serialize. The partner is notified after commit.

        Raises:
            ValidationError: If the type is unknown or a custom status lacks
                title, icon or color, or one of them is too long
            NotFoundError: If the user does not exist
        """
        try:
            status_type = StatusType(status_type)
        except ValueError:
            raise ValidationError(f"Unknown status type: {status_type}") from None

        title, message, icon, color = self._resolve_fields(status_type, title, message, icon, color)

        user = await self._get_user(user_id, for_update=True)
        await self.db.execute(
            update(Status)
            .where(Status.user_id == user.id, Status.is_active.is_(True))
            .values(is_active=False)
        )
        status = Status(
            user_id=user.id,
            type=status_type,
            title=title,
            message=message,
            icon=icon,
            color=color,
            expires_at=expires_at,
            is_active=True,
            created_at=utc_now(),
        )
        self.db.add(status)
        await self.db.commit()

        logger.info("User %s set status %s", user.id, status_type.value)

        if self.notifier is not None:
            await self.notifier.status_changed(user, status)

        return status

    @staticmethod
    def _resolve_fields(
        status_type: StatusType,
        title: str | None,
        message: str | None,
        icon: str | None,
        color: str | None,
    ) -> tuple[str, str | None, str, str]:
        """Pick presentation fields: the preset table wins for non-custom types."""
        preset = preset_for(status_type)
        if preset is not None:
            return preset.title, message or preset.message, preset.icon, preset.color

        supplied = {"title": title, "icon": icon, "color": color}
        missing = [name for name, value in supplied.items() if not value or not value.strip()]
        if missing:
            raise ValidationError(f"Custom status requires {', '.join(missing)}")
        title, icon, color = title.strip(), icon.strip(), color.strip()
        for name, value in (("title", title), ("icon", icon), ("color", color)):
            limit = CUSTOM_FIELD_MAX_LENGTHS[name]
            if len(value) > limit:
                raise ValidationError(f"Custom status {name} exceeds {limit} characters")
        return title, message, icon, color

    async def create_initial_status(self, user: User) -> Status:
        """Seed a new account with an active "free" status. Does not commit."""
        preset = preset_for(StatusType.FREE)
        status = Status(
            user_id=user.id,
            type=StatusType.FREE,
            title=preset.title,
            message=preset.message,
            icon=preset.icon,
            color=preset.color,
            is_active=True,
            created_at=utc_now(),
        )
        self.db.add(status)
        await self.db.flush()
        return status

    async def get_active_status(self, user_id: str) -> Status:
        status = await find_active_status(self.db, user_id)
        if status is None:
            raise NotFoundError("No active status found")
        return status

    async def list_statuses(self, user_id: str) -> list[Status]:
        """All statuses of a user, most recent first. Empty for unknown users."""
        result = await self.db.execute(
            select(Status).where(Status.user_id == user_id).order_by(Status.created_at.desc())
        )
        return list(result.scalars().all())
