from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from tbank_bonus.core.errors import BonusRatesError, InvalidInput, PartialUpdateFailure
from tbank_bonus.services.rate_store import RateStore

logger = logging.getLogger(__name__)

MSG_FETCH_FAILED = "Failed to fetch bonus rates"
MSG_INVALID = "Invalid rates data"
MSG_UPDATE_FAILED = "Failed to update rates"
MSG_UPDATED = "Rates updated successfully"


class Outcome(str, Enum):
    OK = "ok"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class ServiceResult:
    outcome: Outcome
    body: dict[str, Any]
    kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


def _failure(outcome: Outcome, message: str, err: BonusRatesError) -> ServiceResult:
    return ServiceResult(outcome=outcome, body={"error": message}, kind=err.kind)


class RateService:
    """Thin layer between the HTTP routes and RateStore."""

    def __init__(self, store: RateStore):
        self.store = store

    def get_rates(self) -> ServiceResult:
        try:
            rates = self.store.read_all()
        except BonusRatesError as e:
            return _failure(Outcome.SERVER_ERROR, MSG_FETCH_FAILED, e)

        logger.debug(f"Returning rates: {rates}")
        return ServiceResult(outcome=Outcome.OK, body=rates)

    def update_rates(self, payload: Any) -> ServiceResult:
        if payload is None or not isinstance(payload, Mapping):
            return _failure(Outcome.CLIENT_ERROR, MSG_INVALID, InvalidInput(MSG_INVALID))

        try:
            self.store.bulk_update(payload)
        except InvalidInput as e:
            logger.info(f"Rejected rates update: {e.message}")
            return _failure(Outcome.CLIENT_ERROR, MSG_INVALID, e)
        except PartialUpdateFailure as e:
            logger.error(f"Rates update incomplete, applied={e.applied} failed={e.failed}")
            return _failure(Outcome.SERVER_ERROR, MSG_UPDATE_FAILED, e)
        except BonusRatesError as e:
            logger.error(f"Rates update failed ({e.kind}): {e.message}")
            return _failure(Outcome.SERVER_ERROR, MSG_UPDATE_FAILED, e)

        logger.info("Rates updated successfully")
        return ServiceResult(outcome=Outcome.OK, body={"message": MSG_UPDATED})
