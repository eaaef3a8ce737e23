"""Liveness endpoint."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter

from analyzer import __version__
from analyzer.checks.battery import CHECK_REGISTRY, category_max_scores
from api.deps import SettingsDep
from api.schemas import ServiceHealth

router = APIRouter(tags=["Health"])

_started_at = time.monotonic()


@router.get("/health", response_model=ServiceHealth)
async def health(settings: SettingsDep) -> ServiceHealth:
    """The analyzer has no backing services, so a running process is healthy."""
    return ServiceHealth(
        timestamp=datetime.now(UTC).isoformat(),
        version=__version__,
        uptime_seconds=int(time.monotonic() - _started_at),
        check_count=len(CHECK_REGISTRY),
        max_points=sum(category_max_scores().values()),
        narrative_enabled=settings.narrative_enabled,
    )
