from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .errors import StoreError
from ..models.db import Base

logger = logging.getLogger(__name__)


class Database:
    """Process-wide store client: owns the engine and hands out sessions.

    Built once by the application factory, connected before the app serves
    requests and closed on shutdown.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url

        engine_args: dict[str, Any] = {"echo": echo}
        if url.startswith("sqlite"):
            engine_args["connect_args"] = {"check_same_thread": False}
            # An in-memory database lives only as long as its single connection.
            if url in ("sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"):
                engine_args["poolclass"] = StaticPool

        self.engine = create_engine(url, **engine_args)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def connect(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=self.engine)
            tables = inspect(self.engine).get_table_names()
        except SQLAlchemyError as e:
            logger.error(f"Failed to connect to the database: {e}")
            raise StoreError("Failed to connect to the database", str(e)) from e

        logger.info(f"Connected to database {self.engine.url.render_as_string(hide_password=True)}")
        logger.info(f"Available tables: {tables}")

    def session(self) -> Session:
        return self.SessionLocal()

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connection closed")
