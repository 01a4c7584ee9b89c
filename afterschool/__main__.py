"""
Command line entry point.

Usage:
    python -m afterschool               # Serve the API (same as "serve")
    python -m afterschool serve         # Connect to the store and serve the API
    python -m afterschool seed          # Load the default lessons into an empty store
    python -m afterschool seed --reset  # Replace all lessons with the defaults
"""
from __future__ import annotations

import logging
import sys

import uvicorn

from .core.config import settings
from .core.db import Database
from .core.errors import StoreError
from .main import configure_logging, create_app
from .seed import seed_lessons

logger = logging.getLogger(__name__)


def _connect() -> Database:
    database = Database(settings.DB_URL, echo=settings.SQL_ECHO)
    try:
        database.connect()
    except StoreError as e:
        logger.error(f"Failed to connect to the database: {e.message}")
        sys.exit(1)
    return database


def serve() -> None:
    database = _connect()
    app = create_app(settings, database)
    logger.info(f"Server is running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


def seed(reset: bool) -> None:
    database = _connect()
    db = database.session()
    try:
        seed_lessons(db, reset=reset)
    except StoreError as e:
        logger.error(e.message)
        sys.exit(1)
    finally:
        db.close()
        database.close()


def print_usage() -> None:
    print(__doc__)


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    configure_logging(settings.LOG_LEVEL)

    cmd = args[0].lower() if args else "serve"

    if cmd == "serve":
        serve()
    elif cmd == "seed":
        seed(reset="--reset" in args[1:])
    elif cmd in ("-h", "--help", "help"):
        print_usage()
    else:
        print(f"Error: Unknown command '{cmd}'")
        print_usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
