# tbank_bonus/core/database.py
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Base(DeclarativeBase):
    pass


def build_engine(url: str, echo: bool = False) -> Engine:
    kwargs: dict = {}
    if url.startswith("sqlite"):
        # запросы FastAPI идут из пула потоков
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in IN_MEMORY_URLS:
            # одно соединение на процесс, иначе у каждого своя пустая БД
            kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **kwargs)
