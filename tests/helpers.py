from __future__ import annotations

from afterschool.core.db import Database
from afterschool.models.db import Lesson, Order


def fetch_lesson(database: Database, lesson_id: str) -> Lesson | None:
    session = database.session()
    try:
        return session.get(Lesson, lesson_id)
    finally:
        session.close()


def count_orders(database: Database) -> int:
    session = database.session()
    try:
        return session.query(Order).count()
    finally:
        session.close()
