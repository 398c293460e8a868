# tbank_bonus/app_factory.py
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse

from tbank_bonus import __version__
from tbank_bonus.api import bonus_rates_router, health_router
from tbank_bonus.core.config import Settings, settings as default_settings
from tbank_bonus.core.database import build_engine
from tbank_bonus.services.rate_service import MSG_INVALID, RateService
from tbank_bonus.services.rate_store import RateStore
from tbank_bonus.web.pages import router as pages_router

logger = logging.getLogger(__name__)

PACKAGE_STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(settings: Settings | None = None, store: RateStore | None = None) -> FastAPI:
    """Build the application with one RateStore for the whole process.

    The store is initialized here (table + default levels) before any
    request is served; a broken database fails the start-up.
    """
    settings = settings or default_settings

    if store is None:
        engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
        store = RateStore(engine)
    store.initialize()

    app = FastAPI(title=settings.APP_TITLE, version=__version__)
    app.state.settings = settings
    app.state.rate_store = store
    app.state.rate_service = RateService(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse({"error": MSG_INVALID}, status_code=400)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse({"error": "Something went wrong!"}, status_code=500)

    static_dir = Path(settings.STATIC_DIR) if settings.STATIC_DIR else PACKAGE_STATIC_DIR
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    else:
        logger.warning(f"Static directory not found, /static disabled: {static_dir}")

    app.include_router(bonus_rates_router, prefix="/api")
    app.include_router(health_router, prefix="/api")
    app.include_router(pages_router)

    return app
