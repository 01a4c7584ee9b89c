"""
Seat reconciliation after an order is placed.

Each line item is handled on its own: a missing lesson or a failed write is
recorded in the report and never stops the remaining lines.
"""
from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import case, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from ..core.errors import InvalidIdentifier
from ..models.db import Lesson
from ..models.entities import LineResult, ReconciliationReport
from ..models.schemas import LineItemIn
from .lesson_service import parse_lesson_id

logger = logging.getLogger(__name__)


def _decrement(lesson_id: str, quantity: int):
    # Evaluated by the database so two orders for the same lesson cannot
    # overwrite each other's result.
    return (
        update(Lesson)
        .where(Lesson.id == lesson_id)
        .values(spaces=case((Lesson.spaces > quantity, Lesson.spaces - quantity), else_=0))
        .execution_options(synchronize_session=False)
    )


def _rollback(db: DBSession) -> None:
    try:
        db.rollback()
    except SQLAlchemyError as e:
        logger.error(f"Rollback after failed seat update also failed: {e}")


class SeatService:
    @staticmethod
    def reconcile_line(db: DBSession, item: LineItemIn) -> LineResult:
        if not item.id:
            logger.error("Error updating lesson: line item has no lesson id")
            return LineResult("", item.quantity, "failed", detail="Missing lesson reference")

        try:
            key = parse_lesson_id(item.id)
        except InvalidIdentifier as e:
            logger.error(f"Error updating lesson {item.id}: {e.message}")
            return LineResult(item.id, item.quantity, "failed", detail=e.error)

        try:
            lesson = db.get(Lesson, key)
            if lesson is None:
                logger.warning(f"Lesson not found: {key}")
                return LineResult(key, item.quantity, "skipped", detail="Lesson not found")

            previous = int(lesson.spaces)
            db.execute(_decrement(key, item.quantity))
            db.commit()
            db.refresh(lesson)
        except (SQLAlchemyError, OverflowError, ValueError) as e:
            # Bind errors (e.g. an int too large for the column) come straight from the driver.
            _rollback(db)
            logger.error(f"Error updating lesson {key}: {e}")
            return LineResult(key, item.quantity, "failed", detail=str(e))

        logger.info(f'Updated lesson "{lesson.subject}": {previous} -> {lesson.spaces} spaces')
        return LineResult(key, item.quantity, "updated", previous_spaces=previous, spaces=int(lesson.spaces))

    @staticmethod
    def reconcile_seats(db: DBSession, items: Iterable[LineItemIn]) -> ReconciliationReport:
        logger.info("Updating lesson spaces after order...")
        report = ReconciliationReport()
        for item in items:
            report.lines.append(SeatService.reconcile_line(db, item))
        logger.info(f"Finished updating lesson spaces: {report.summary()}")
        return report
