from __future__ import annotations

import uuid

from sqlalchemy.exc import OperationalError
from sqlalchemy.sql.dml import Update

from afterschool.models.db import Lesson
from afterschool.models.schemas import LineItemIn
from afterschool.services.seat_service import SeatService
from helpers import fetch_lesson


def test_reconcile_reports_each_line(db, database, lessons):
    missing = str(uuid.uuid4())
    report = SeatService.reconcile_seats(
        db,
        [
            LineItemIn(id=lessons["Math"], quantity=2),
            LineItemIn(id=missing, quantity=1),
            LineItemIn(id="12345", quantity=1),
            LineItemIn(id=lessons["English"], quantity=7),
        ],
    )

    assert [x.status for x in report.lines] == ["updated", "skipped", "failed", "updated"]
    math, absent, malformed, english = report.lines
    assert (math.previous_spaces, math.spaces) == (5, 3)
    assert absent.lesson_id == missing
    assert absent.detail == "Lesson not found"
    assert malformed.detail == "Invalid lesson ID format"
    assert (english.previous_spaces, english.spaces) == (3, 0)
    assert report.summary() == {"updated": 2, "skipped": 1, "failed": 1}

    assert fetch_lesson(database, lessons["Math"]).spaces == 3
    assert fetch_lesson(database, lessons["English"]).spaces == 0


def test_lesson_already_at_zero_stays_at_zero(db, database, lessons):
    report = SeatService.reconcile_seats(db, [LineItemIn(id=lessons["Science"], quantity=1)])
    assert report.lines[0].status == "updated"
    assert report.lines[0].spaces == 0
    assert fetch_lesson(database, lessons["Science"]).spaces == 0


def test_write_failure_does_not_stop_remaining_lines(db, database, lessons, monkeypatch):
    execute = db.execute
    failed = []

    def flaky_execute(statement, *args, **kwargs):
        if isinstance(statement, Update) and not failed:
            failed.append(statement)
            raise OperationalError("UPDATE lessons", {}, Exception("database is locked"))
        return execute(statement, *args, **kwargs)

    monkeypatch.setattr(db, "execute", flaky_execute)

    report = SeatService.reconcile_seats(
        db,
        [LineItemIn(id=lessons["Math"], quantity=1), LineItemIn(id=lessons["Art"], quantity=3)],
    )

    assert [x.status for x in report.lines] == ["failed", "updated"]
    assert "database is locked" in report.lines[0].detail
    assert fetch_lesson(database, lessons["Math"]).spaces == 5
    assert fetch_lesson(database, lessons["Art"]).spaces == 7


def test_decrement_uses_current_store_value(database, lessons):
    lesson_id = lessons["Math"]
    first = database.session()
    second = database.session()
    try:
        # Both sessions have seen 5 spaces before either writes.
        assert first.get(Lesson, lesson_id).spaces == 5
        assert second.get(Lesson, lesson_id).spaces == 5

        SeatService.reconcile_line(first, LineItemIn(id=lesson_id, quantity=2))
        result = SeatService.reconcile_line(second, LineItemIn(id=lesson_id, quantity=2))
    finally:
        first.close()
        second.close()

    assert result.spaces == 1
    assert fetch_lesson(database, lesson_id).spaces == 1


def test_unbindable_quantity_does_not_stop_remaining_lines(db, database, lessons):
    report = SeatService.reconcile_seats(
        db,
        [
            LineItemIn(id=lessons["Math"], quantity=2**70),
            LineItemIn(quantity=1),
            LineItemIn(id=lessons["Art"], quantity=1),
        ],
    )

    assert [x.status for x in report.lines] == ["failed", "failed", "updated"]
    assert report.lines[1].detail == "Missing lesson reference"
    assert fetch_lesson(database, lessons["Math"]).spaces == 5
    assert fetch_lesson(database, lessons["Art"]).spaces == 9
