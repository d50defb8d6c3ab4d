"""Main API router aggregation."""

from fastapi import APIRouter

from partner_status.api.auth import router as auth_router
from partner_status.api.statuses import router as statuses_router
from partner_status.api.users import router as users_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(statuses_router)
