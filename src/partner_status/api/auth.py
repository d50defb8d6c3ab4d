"""Authentication API endpoints."""

from fastapi import APIRouter, Depends

from partner_status.api.dependencies import get_user_service
from partner_status.schemas.user import UserCreate, UserLogin, UserResponse
from partner_status.services.users import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse)
async def register(
    user_data: UserCreate,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register a new user.

    Creates the account with a hashed password, a fresh invitation code and
    an initial "free" status.

    Raises:
        400: If the username already exists
    """
    user = await users.register(user_data.name, user_data.username, user_data.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
async def login(
    credentials: UserLogin,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Authenticate with username and password.

    Raises:
        401: If credentials are invalid
    """
    user = await users.authenticate(credentials.username, credentials.password)
    return UserResponse.model_validate(user)
