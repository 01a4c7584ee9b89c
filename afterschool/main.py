from __future__ import annotations

import datetime as dt
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__
from .api import lessons_router, orders_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.errors import IMAGES_PREFIX, register_error_handlers


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Set specific log levels for third-party libraries
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)
configure_logging(default_settings.LOG_LEVEL)

ENDPOINTS = [
    "GET /lessons - Get all lessons",
    "GET /search?query=term - Search lessons",
    "POST /orders - Create new order",
    "PUT /lessons/:id - Update lesson",
    "GET /orders - Get all orders",
]


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or default_settings
    database = database or Database(settings.DB_URL, echo=settings.SQL_ECHO)
    images_dir = Path(settings.IMAGES_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting application...")
        database.connect()
        images_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Application startup complete")
        yield
        logger.info("Shutting down...")
        database.close()

    app = FastAPI(title="Afterschool Lessons", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log incoming requests."""
        target = request.url.path + (f"?{request.url.query}" if request.url.query else "")
        logger.info(f"Request: {request.method} {target}")
        response = await call_next(request)
        logger.info(f"Response: {request.method} {request.url.path} - Status: {response.status_code}")
        return response

    register_error_handlers(app)

    app.include_router(lessons_router)
    app.include_router(orders_router)

    # Directory is created by the lifespan hook, before the first request.
    app.mount(IMAGES_PREFIX, StaticFiles(directory=images_dir, check_dir=False), name="images")

    @app.get("/")
    def root():
        return {
            "message": "After School Classes API is running!",
            "version": __version__,
            "endpoints": ENDPOINTS,
            "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
        }

    return app


app = create_app()
