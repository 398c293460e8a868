# tbank_bonus/schemas/bonus_rate.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class BonusRatesUpdate(BaseModel):
    # Форма rates проверяется в RateService: null/строка -> 400, а не 422
    rates: Any = None


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str


class HealthOut(BaseModel):
    status: str
    timestamp: str
    message: str
    port: int
