"""Single-page analysis endpoint."""

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from analyzer.pipeline import analyze_url
from api.deps import (
    FetchTransportDep,
    NarrativeProviderDep,
    RateLimiterDep,
    SettingsDep,
    client_key,
)
from api.metrics import record_analysis
from api.schemas import ErrorResponse
from api.schemas.analysis import AnalyzeRequest
from api.sentry import tag_target

router = APIRouter(tags=["Analysis"])
logger = structlog.get_logger(__name__)


@router.post(
    "/analyze",
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def analyze(
    body: AnalyzeRequest,
    request: Request,
    settings: SettingsDep,
    limiter: RateLimiterDep,
    provider: NarrativeProviderDep,
    transport: FetchTransportDep,
) -> ORJSONResponse:
    """
    Analyze one page for AI search readiness.

    Returns the full analysis result. Fetch failures come back as an error
    envelope whose category tells the caller whether the site was
    unreachable, too slow, or blocking the request.
    """
    if settings.rate_limit_enabled:
        state = limiter.check(client_key(request))
        logger.debug("rate_limit_checked", remaining=state.remaining)

    tag_target(body.url)
    result = await analyze_url(
        body.url,
        include_ai=body.include_ai,
        settings=settings,
        provider=provider,
        transport=transport,
    )
    record_analysis(result.grade, result.score, narrative=result.narrative_analysis is not None)
    return ORJSONResponse(content=result.to_dict())
