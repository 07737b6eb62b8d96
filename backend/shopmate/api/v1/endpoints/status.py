"""
Status and health check endpoints.

WHAT: Health monitoring for the assistant service
WHY: Quick diagnostics for frontend and ops
HOW: FastAPI endpoint reporting app metadata and cache size
"""

from fastapi import APIRouter

from ....core.config import settings
from ....core.conversation import conversation_manager

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Overall application health check.

    Returns:
        JSON with status, version and live conversation count
    """
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "app_name": settings.APP_NAME,
        "conversations": len(conversation_manager),
        "supported_languages": settings.get_supported_languages(),
    }
