"""API routes."""

from shamir_service.api.sss import router as sss_router

__all__ = [
    "sss_router",
]
