from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from tbank_bonus.schemas.bonus_rate import BonusRatesUpdate, ErrorOut, MessageOut
from tbank_bonus.services.rate_service import Outcome, RateService, ServiceResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bonus-rates", tags=["bonus-rates"])

STATUS_CODES = {
    Outcome.OK: 200,
    Outcome.CLIENT_ERROR: 400,
    Outcome.SERVER_ERROR: 500,
}

ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


def get_rate_service(request: Request) -> RateService:
    return request.app.state.rate_service


def to_response(result: ServiceResult) -> JSONResponse:
    return JSONResponse(result.body, status_code=STATUS_CODES[result.outcome])


@router.get("", response_model=dict[str, float], include_in_schema=False)
@router.get("/", response_model=dict[str, float], responses=ERROR_RESPONSES)
def read_bonus_rates(service: RateService = Depends(get_rate_service)):
    logger.info("GET /api/bonus-rates called")
    return to_response(service.get_rates())


@router.post("", response_model=MessageOut, include_in_schema=False)
@router.post("/", response_model=MessageOut, responses=ERROR_RESPONSES)
def update_bonus_rates(
    payload: BonusRatesUpdate,
    service: RateService = Depends(get_rate_service),
):
    logger.info(f"POST /api/bonus-rates called with: {payload.rates}")
    return to_response(service.update_rates(payload.rates))
