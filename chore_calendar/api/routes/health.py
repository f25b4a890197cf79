"""
Health and configuration endpoints
"""

from fastapi import APIRouter

from chore_calendar.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness probe (public endpoint)"""
    return {"status": "ok", "message": f"{settings.PROJECT_NAME} is running"}


@router.get("/config/environment")
async def get_environment_config():
    """Non-secret runtime configuration, useful when wiring up a frontend"""
    return settings.get_environment_config()
