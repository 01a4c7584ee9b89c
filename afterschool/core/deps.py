from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session as DBSession

from .db import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Iterator[DBSession]:
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
