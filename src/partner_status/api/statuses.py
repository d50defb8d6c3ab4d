"""Status API endpoints."""

from fastapi import APIRouter, Depends

from partner_status.api.dependencies import get_status_service
from partner_status.schemas.status import StatusCreate, StatusResponse
from partner_status.services.statuses import StatusService

router = APIRouter(prefix="/statuses", tags=["statuses"])


@router.post("", response_model=StatusResponse)
async def set_status(
    status_data: StatusCreate,
    statuses: StatusService = Depends(get_status_service),
) -> StatusResponse:
    """Set the user's current status.

    Deactivates the previous status and pushes the new one to the user's
    partner if the partner is connected to the live channel.

    Raises:
        400: If the body is invalid or a custom status lacks title, icon or color
        404: If the user does not exist
    """
    status = await statuses.set_status(
        status_data.user_id,
        status_data.type,
        title=status_data.title,
        message=status_data.message,
        icon=status_data.icon,
        color=status_data.color,
        expires_at=status_data.expires_at,
    )
    return StatusResponse.model_validate(status)
