from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_settings
from app.core.config import Settings
from app.services.health import report_health

router = APIRouter(tags=["default"])


@router.get("/api/healthz")
def healthz(response: Response, settings: Settings = Depends(get_settings)):
    result = report_health(settings)
    if not result.healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result.as_dict()
