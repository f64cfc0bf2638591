from fastapi import APIRouter
from pydantic import BaseModel

from src.events.effects import side_effects

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    version: str = "0.1.0"
    failed_side_effects: int = 0


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint to verify the API is running.
    Also reports how many best-effort side effects failed recently.
    """
    return HealthCheckResponse(
        status="healthy",
        failed_side_effects=len(side_effects.effect_log.failures()),
    )
