from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, String

from tbank_bonus.core.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BonusRate(Base):
    """
    Ставка бонуса для уровня ("Level I", "Level II", ...).
    Уровни создаются только при инициализации, через API меняется лишь rate.
    """
    __tablename__ = "bonus_rates"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(64), unique=True, nullable=False, index=True)
    rate = Column(Float, nullable=False)

    updated_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
