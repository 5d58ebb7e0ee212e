"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import Field

from fpv.application.usecase.dto import CamelModel
from fpv.config import Settings
from fpv.domain.error import StorageError
from fpv.persistence.database import StorageClient

router = APIRouter(tags=["health"], route_class=DishkaRoute)

VERSION = "1.0.0"


class HealthResponse(CamelModel):
    """Health check response."""

    status: str
    message: str
    timestamp: datetime
    version: str
    git_sha: str


class StorageHealthResponse(CamelModel):
    """Storage health check response."""

    status: str
    error: str | None = Field(default=None)


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return HealthResponse(
        status="OK",
        message="Project FPV Backend is running with Firebase Authentication!",
        timestamp=datetime.now(timezone.utc),
        version=VERSION,
        git_sha=settings.git_sha,
    )


@router.get(
    "/health/storage",
    response_model=StorageHealthResponse,
    response_model_exclude_none=True,
)
async def storage_health(storage: FromDishka[StorageClient]):
    """Check that the database answers.

    Returns:
        `{"status": "OK"}`, or a 500 response when the database is unreachable
    """
    try:
        await storage.ping()
    except StorageError:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "unavailable", "error": "Database connection failed"},
        )
    return StorageHealthResponse(status="OK")
