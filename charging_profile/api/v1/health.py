from fastapi import APIRouter, Depends

from charging_profile.api.dependencies import get_settings
from charging_profile.config.settings import Settings
from charging_profile.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(ok=True)


@router.get("/health/info")
def service_info(settings: Settings = Depends(get_settings)):
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "ok",
    }
