from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy.orm import Session as DBSession

from ..core.errors import ClientError, InvalidIdentifier, NotFound, store_errors
from ..models.db import Lesson
from ..models.entities import LessonUpdate

logger = logging.getLogger(__name__)


def parse_lesson_id(value: Any) -> str:
    """Normalize a lesson id, raising ``InvalidIdentifier`` if it is not a UUID."""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError):
        raise InvalidIdentifier("Invalid lesson ID format", "The provided lesson ID is not valid")


def number_text(value: int | float) -> str:
    """Decimal string form used when matching numbers: ``100.0`` reads as ``"100"``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def lesson_matches(lesson: Lesson, term: str) -> bool:
    needle = term.lower()
    haystacks = (
        lesson.subject or "",
        lesson.location or "",
        number_text(lesson.price),
        number_text(lesson.spaces),
    )
    return any(needle in h.lower() for h in haystacks)


class LessonService:
    @staticmethod
    def list_lessons(db: DBSession) -> list[Lesson]:
        with store_errors("Failed to fetch lessons"):
            lessons = db.query(Lesson).all()
        logger.info(f"Found {len(lessons)} lessons")
        return lessons

    @staticmethod
    def search_lessons(db: DBSession, term: str | None) -> list[Lesson]:
        term = term or ""
        logger.info(f'Searching for lessons with term: "{term}"')

        with store_errors("Search failed"):
            lessons = db.query(Lesson).all()

        if not term.strip():
            return lessons

        # Numbers are matched on their text form, so filtering happens here
        # rather than in SQL where CAST output differs between backends.
        results = [x for x in lessons if lesson_matches(x, term)]
        logger.info(f'Found {len(results)} lessons matching "{term}"')
        return results

    @staticmethod
    def update_lesson(db: DBSession, lesson_id: str, changes: dict[str, Any]) -> LessonUpdate:
        if not changes:
            raise ClientError("No update data provided", "Request body must contain fields to update")

        key = parse_lesson_id(lesson_id)
        logger.info(f"Updating lesson {key}: {changes}")

        with store_errors("Failed to update lesson"):
            lesson = db.get(Lesson, key)
            if lesson is None:
                raise NotFound("Lesson not found", f"No lesson found with ID: {lesson_id}")

            modified = {k: v for k, v in changes.items() if getattr(lesson, k) != v}
            if not modified:
                return LessonUpdate(lesson_id=key, modified_count=0)

            for k, v in modified.items():
                setattr(lesson, k, v)
            db.commit()

        logger.info(f"Lesson {key} updated: {sorted(modified)}")
        return LessonUpdate(lesson_id=key, modified_count=1)
