"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from board.application.event import NotificationEventBus
from board.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    git_sha: str
    pending_deliveries: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    bus: FromDishka[NotificationEventBus],
) -> HealthResponse:
    """Basic health check endpoint.

    Also reports how many push deliveries are still in flight.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        git_sha=settings.git_sha,
        pending_deliveries=bus.pending,
    )
