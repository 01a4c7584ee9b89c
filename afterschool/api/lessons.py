from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session as DBSession

from ..core.deps import get_db
from ..models.schemas import LessonOut, LessonUnchangedOut, LessonUpdatedOut, LessonUpdateIn
from ..services.lesson_service import LessonService

router = APIRouter(tags=["lessons"])


@router.get("/lessons", response_model=list[LessonOut])
def list_lessons(db: DBSession = Depends(get_db)):
    return [LessonOut.model_validate(x) for x in LessonService.list_lessons(db)]


@router.get("/search", response_model=list[LessonOut])
def search_lessons(
    query: str | None = Query(default=None),
    db: DBSession = Depends(get_db),
):
    return [LessonOut.model_validate(x) for x in LessonService.search_lessons(db, query)]


@router.put("/lessons/{lesson_id}", response_model=LessonUpdatedOut | LessonUnchangedOut)
def update_lesson(
    lesson_id: str,
    payload: LessonUpdateIn | None = Body(default=None),
    db: DBSession = Depends(get_db),
):
    changes = payload.changes() if payload is not None else {}
    result = LessonService.update_lesson(db, lesson_id, changes)
    if result.modified_count == 0:
        return LessonUnchangedOut(lessonId=result.lesson_id)
    return LessonUpdatedOut(modifiedCount=result.modified_count)
