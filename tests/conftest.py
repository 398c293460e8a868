"""Shared pytest fixtures: a fresh SQLite file database per test."""

from datetime import datetime, timedelta
from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from tbank_bonus.app_factory import create_app
from tbank_bonus.core.config import Settings
from tbank_bonus.core.database import build_engine
from tbank_bonus.services.rate_store import RateStore


class TickingClock:
    """Clock that moves one second forward on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self._start = start
        self._ticks = count()

    def __call__(self) -> datetime:
        return self._start + timedelta(seconds=next(self._ticks))


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'bonus_rates.db'}"


@pytest.fixture
def engine(db_url):
    engine = build_engine(db_url)
    yield engine
    engine.dispose()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store(engine, clock) -> RateStore:
    store = RateStore(engine, clock=clock)
    store.initialize()
    return store


@pytest.fixture
def settings(db_url) -> Settings:
    return Settings(DATABASE_URL=db_url, PORT=4321, HEALTH_MESSAGE="test instance")


@pytest.fixture
def client(settings, store) -> TestClient:
    app = create_app(settings, store=store)
    return TestClient(app)


@pytest.fixture
def fail_updates_for(engine):
    """Make every UPDATE of the given level abort inside SQLite itself."""

    def install(name: str) -> None:
        with engine.begin() as conn:
            conn.execute(text(
                "CREATE TRIGGER fail_update BEFORE UPDATE ON bonus_rates "
                f"WHEN NEW.name = '{name}' "
                "BEGIN SELECT RAISE(ABORT, 'forced write failure'); END"
            ))

    return install


@pytest.fixture
def drop_rates_table(engine):
    def drop() -> None:
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE bonus_rates"))

    return drop
