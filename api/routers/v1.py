"""Version 1 of the public API."""

from fastapi import APIRouter

from analyzer import __version__
from api.routers import analyze
from api.schemas import ApiRoot

router = APIRouter()
router.include_router(analyze.router)


@router.get("/", response_model=ApiRoot)
async def index() -> ApiRoot:
    return ApiRoot(
        version="1",
        analyzer_version=__version__,
        endpoints=["POST /v1/analyze"],
    )
