"""Persistent store of bonus rates keyed by level name."""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.schema import CreateIndex, CreateTable

from tbank_bonus.core.errors import InvalidInput, PartialUpdateFailure, StoreUnavailable
from tbank_bonus.models.bonus_rate import BonusRate, utc_now

logger = logging.getLogger(__name__)

DEFAULT_RATES: dict[str, float] = {
    "Level I": 0.00005,
    "Level II": 0.000055,
    "Level III": 0.00006,
}

# INSERT ... ON CONFLICT DO NOTHING по диалектам
_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


@dataclass
class BulkUpdateResult:
    applied: list[str] = field(default_factory=list)
    # имена без строки в таблице: UPDATE затронул 0 строк, это не ошибка
    unknown: list[str] = field(default_factory=list)


def _coerce_rate(name: Any, rate: Any) -> float:
    if not isinstance(name, str):
        raise InvalidInput(f"Level name must be a string, got {type(name).__name__}")
    if isinstance(rate, bool) or not isinstance(rate, (int, float, Decimal)):
        raise InvalidInput(f"Rate for {name!r} must be a number")
    try:
        value = float(rate)
    except (OverflowError, ValueError) as e:
        # int вне диапазона float, Decimal("sNaN")
        raise InvalidInput(f"Rate for {name!r} must be finite") from e
    if not math.isfinite(value):
        raise InvalidInput(f"Rate for {name!r} must be finite")
    return value


class RateStore:
    """Mapping level name -> (rate, updated_at) backed by one SQL table.

    One instance per process. Writes go one key at a time, each in its own
    transaction, under a lock held for that single write only. Reads take no
    lock, so a read during a bulk update may see old and new values mixed
    across keys.
    """

    def __init__(
        self,
        engine: Engine,
        clock: Callable[[], datetime] = utc_now,
        defaults: Mapping[str, float] | None = None,
    ):
        self._engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)
        self._clock = clock
        self._defaults = dict(DEFAULT_RATES if defaults is None else defaults)
        self._write_lock = threading.Lock()

    def initialize(self) -> None:
        """Create the table if needed and seed missing default levels.

        Each default row goes through an atomic insert-if-absent, so existing
        levels keep their rates and concurrent cold starts cannot duplicate
        rows. Safe to call on every start.
        """
        insert = _INSERTS.get(self._engine.dialect.name)
        if insert is None:
            raise StoreUnavailable(
                f"Unsupported database dialect: {self._engine.dialect.name}"
            )

        table = BonusRate.__table__
        now = self._clock()
        rows = [
            {"name": name, "rate": rate, "updated_at": now}
            for name, rate in self._defaults.items()
        ]
        stmt = insert(table).on_conflict_do_nothing(index_elements=[table.c.name])

        try:
            # IF NOT EXISTS вместо checkfirst: без гонки check-then-create
            with self._engine.begin() as conn:
                conn.execute(CreateTable(table, if_not_exists=True))
                for index in table.indexes:
                    conn.execute(CreateIndex(index, if_not_exists=True))
            with self._write_lock, self._sessions.begin() as db:
                for row in rows:
                    db.execute(stmt, row)
        except SQLAlchemyError as e:
            logger.error(f"Bonus rates store init failed: {e}")
            raise StoreUnavailable("Failed to initialize bonus rates store") from e

        logger.info(f"Bonus rates store ready ({len(rows)} default levels checked)")

    def read_all(self) -> dict[str, float]:
        """Return ``{name: rate}`` for every level, ordered by name."""
        table = BonusRate.__table__
        try:
            with self._sessions() as db:
                rows = db.execute(
                    select(table.c.name, table.c.rate).order_by(table.c.name)
                ).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read bonus rates: {e}")
            raise StoreUnavailable("Failed to fetch bonus rates") from e

        return {name: rate for name, rate in rows}

    def read_tiers(self) -> list[BonusRate]:
        """Like read_all, but returns full rows including ``updated_at``."""
        try:
            with self._sessions() as db:
                return list(db.scalars(select(BonusRate).order_by(BonusRate.name)).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to read bonus rates: {e}")
            raise StoreUnavailable("Failed to fetch bonus rates") from e

    def bulk_update(self, updates: Mapping[str, Any] | None) -> BulkUpdateResult:
        """Set ``rate`` and refresh ``updated_at`` for every name in ``updates``.

        Not atomic across keys: every key is attempted, keys written before
        or after a failing one stay written, and any storage failure turns
        the whole call into PartialUpdateFailure. Unknown names are no-ops.

        Raises:
            InvalidInput: ``updates`` is not a mapping, or holds a non-string
                name or a non-finite / non-numeric rate. Nothing is written.
            PartialUpdateFailure: at least one per-key write failed.
        """
        if updates is None or not isinstance(updates, Mapping):
            raise InvalidInput("Invalid rates data")

        # сначала проверяем весь батч, чтобы плохой ввод не писал частично
        clean = {name: _coerce_rate(name, rate) for name, rate in updates.items()}

        result = BulkUpdateResult()
        failed: list[str] = []
        for name, rate in clean.items():
            try:
                matched = self._update_one(name, rate)
            except SQLAlchemyError as e:
                logger.error(f"Database update error for {name!r}: {e}")
                failed.append(name)
                continue

            result.applied.append(name)
            if not matched:
                result.unknown.append(name)

        if failed:
            raise PartialUpdateFailure(
                f"Failed to update {len(failed)} of {len(clean)} rates",
                applied=result.applied,
                failed=failed,
            )

        if result.unknown:
            logger.info(f"Ignored unknown levels: {result.unknown}")
        return result

    def _update_one(self, name: str, rate: float) -> int:
        table = BonusRate.__table__
        stmt = (
            update(table)
            .where(table.c.name == name)
            .values(rate=rate, updated_at=self._clock())
        )
        with self._write_lock, self._sessions.begin() as db:
            return db.execute(stmt).rowcount
