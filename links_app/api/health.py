import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from links_app.schemas.link import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=HealthStatus)
def health_check(request: Request):
    """Health check endpoint"""
    uptime = int(time.monotonic() - request.app.state.started_at)
    return HealthStatus(
        ok=True,
        version=request.app.state.settings.app_version,
        uptime=uptime,
        timestamp=datetime.now(timezone.utc),
    )
