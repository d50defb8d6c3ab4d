"""Status ORM model and the preset status table."""

import enum
import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from partner_status.database import Base, utc_now


class StatusType(enum.StrEnum):
    """Kinds of status a user can share."""

    FREE = "free"
    BUSY = "busy"
    MEETING = "meeting"
    SLEEPING = "sleeping"
    CUSTOM = "custom"


@dataclass(frozen=True)
class StatusPreset:
    """Fixed presentation fields for a non-custom status type."""

    title: str
    icon: str
    color: str
    message: str


FREE_PRESET = StatusPreset(title="Free", icon="check", color="success", message="Available now")
BUSY_PRESET = StatusPreset(title="Busy", icon="times", color="danger", message="Do not disturb")
MEETING_PRESET = StatusPreset(
    title="Meeting", icon="briefcase", color="info", message="In a meeting"
)
SLEEPING_PRESET = StatusPreset(
    title="Sleeping", icon="moon", color="purple", message="Catching some Z's"
)


def preset_for(status_type: StatusType) -> StatusPreset | None:
    """Return the preset for a status type, or None for custom statuses."""
    match status_type:
        case StatusType.FREE:
            return FREE_PRESET
        case StatusType.BUSY:
            return BUSY_PRESET
        case StatusType.MEETING:
            return MEETING_PRESET
        case StatusType.SLEEPING:
            return SLEEPING_PRESET
        case StatusType.CUSTOM:
            return None


class Status(Base):
    """A status a user has set. History is append-only."""

    __tablename__ = "statuses"
    __table_args__ = (
        # At most one active status per user
        Index(
            "uq_statuses_one_active_per_user",
            "user_id",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    type: Mapped[StatusType] = mapped_column(
        Enum(StatusType, name="status_type", values_callable=lambda e: [m.value for m in e])
    )
    title: Mapped[str] = mapped_column(String(100))
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str] = mapped_column(String(50))
    color: Mapped[str] = mapped_column(String(50))
    expires_at: Mapped[datetime | None] = mapped_column(nullable=True)  # advisory only
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now, index=True)
