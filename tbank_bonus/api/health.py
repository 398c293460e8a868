from datetime import datetime, timezone

from fastapi import APIRouter, Request

from tbank_bonus.schemas.bonus_rate import HealthOut

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health(request: Request) -> HealthOut:
    # не трогает БД: только жив ли процесс
    settings = request.app.state.settings
    return HealthOut(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        message=settings.HEALTH_MESSAGE,
        port=settings.PORT,
    )
