"""API route modules."""

from partner_status.api.router import api_router

__all__ = ["api_router"]
