"""Default lesson catalogue loaded into an empty store."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session as DBSession

from .core.errors import store_errors
from .models.db import Lesson

logger = logging.getLogger(__name__)

DEFAULT_LESSONS = [
    {"subject": "Math", "location": "London", "price": 100, "spaces": 5, "image": "math.png"},
    {"subject": "English", "location": "Oxford", "price": 80, "spaces": 5, "image": "english.png"},
    {"subject": "Science", "location": "Cambridge", "price": 90, "spaces": 5, "image": "science.png"},
    {"subject": "History", "location": "Bristol", "price": 70, "spaces": 5, "image": "history.png"},
    {"subject": "Geography", "location": "York", "price": 75, "spaces": 5, "image": "geography.png"},
    {"subject": "Art", "location": "Brighton", "price": 60, "spaces": 5, "image": "art.png"},
    {"subject": "Music", "location": "Manchester", "price": 85, "spaces": 5, "image": "music.png"},
    {"subject": "Drama", "location": "Leeds", "price": 65, "spaces": 5, "image": "drama.png"},
    {"subject": "Coding", "location": "London", "price": 120, "spaces": 5, "image": "coding.png"},
    {"subject": "Chess", "location": "Hendon", "price": 50, "spaces": 5, "image": "chess.png"},
]


def seed_lessons(db: DBSession, reset: bool = False) -> int:
    """Insert the default lessons. Returns how many were added.

    Nothing is added when lessons already exist, unless ``reset`` wipes them first.
    """
    with store_errors("Failed to seed lessons"):
        if reset:
            deleted = db.query(Lesson).delete()
            logger.info(f"Removed {deleted} existing lessons")
        elif db.query(Lesson).count():
            logger.info("Lessons already present, skipping seed")
            return 0

        db.add_all(Lesson(**data) for data in DEFAULT_LESSONS)
        db.commit()

    logger.info(f"Seeded {len(DEFAULT_LESSONS)} lessons")
    return len(DEFAULT_LESSONS)
