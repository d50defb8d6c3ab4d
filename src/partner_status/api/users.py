"""User, pairing and per-user status API endpoints."""

from fastapi import APIRouter, Depends

from partner_status.api.dependencies import (
    get_activity_service,
    get_pairing_service,
    get_status_service,
    get_user_service,
)
from partner_status.schemas.status import ActivityEntry, StatusResponse
from partner_status.schemas.user import (
    ConnectRequest,
    PartnerResponse,
    ProfilePictureUpdate,
    UserResponse,
)
from partner_status.services.activity import ActivityService
from partner_status.services.pairing import PairingService
from partner_status.services.statuses import StatusService
from partner_status.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a user by ID."""
    return UserResponse.model_validate(await users.get_user(user_id))


@router.post("/{user_id}/profile-picture", response_model=UserResponse)
async def update_profile_picture(
    user_id: str,
    body: ProfilePictureUpdate,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Replace the user's profile picture. An empty value removes it."""
    user = await users.update_profile_picture(user_id, body.profile_picture)
    return UserResponse.model_validate(user)


@router.post("/{user_id}/connect", response_model=UserResponse)
async def connect_partner(
    user_id: str,
    body: ConnectRequest,
    pairing: PairingService = Depends(get_pairing_service),
) -> UserResponse:
    """Pair with the user owning the given invitation code.

    Returns the updated user with ``partnerId`` set.

    Raises:
        404: If the user or invitation code is unknown
        400: If the code is the user's own
    """
    user = await pairing.connect(user_id, body.invitation_code)
    return UserResponse.model_validate(user)


@router.get("/{user_id}/partner", response_model=PartnerResponse)
async def get_partner(
    user_id: str,
    pairing: PairingService = Depends(get_pairing_service),
) -> PartnerResponse:
    """Get the user's partner along with the partner's active status."""
    partner, current_status = await pairing.get_partner(user_id)
    response = PartnerResponse.model_validate(partner)
    if current_status is not None:
        response.current_status = StatusResponse.model_validate(current_status)
    return response


@router.get("/{user_id}/status", response_model=StatusResponse)
async def get_active_status(
    user_id: str,
    statuses: StatusService = Depends(get_status_service),
) -> StatusResponse:
    """Get the user's active status."""
    return StatusResponse.model_validate(await statuses.get_active_status(user_id))


@router.get("/{user_id}/statuses", response_model=list[StatusResponse])
async def list_statuses(
    user_id: str,
    statuses: StatusService = Depends(get_status_service),
) -> list[StatusResponse]:
    """Get the user's status history, most recent first."""
    return [StatusResponse.model_validate(s) for s in await statuses.list_statuses(user_id)]


@router.get("/{user_id}/activity", response_model=list[ActivityEntry])
async def get_activity(
    user_id: str,
    activity: ActivityService = Depends(get_activity_service),
) -> list[ActivityEntry]:
    """Get the user's and partner's statuses merged, most recent first."""
    return [
        ActivityEntry.model_validate(
            {
                **StatusResponse.model_validate(item.status).model_dump(),
                "is_own_status": item.is_own_status,
            }
        )
        for item in await activity.get_activity(user_id)
    ]
