from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LessonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(alias="_id")
    subject: str
    location: str
    price: float
    spaces: int
    image: str | None = None


class LessonUpdateIn(BaseModel):
    """Partial lesson update; only the fields sent are applied."""

    model_config = ConfigDict(extra="forbid")

    subject: str | None = Field(default=None, min_length=1, max_length=120)
    location: str | None = Field(default=None, min_length=1, max_length=120)
    price: float | None = Field(default=None, ge=0)
    spaces: int | None = Field(default=None, ge=0)
    image: str | None = Field(default=None, max_length=255)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class LessonUpdatedOut(BaseModel):
    success: bool = True
    message: str = "Lesson updated successfully"
    modifiedCount: int


class LessonUnchangedOut(BaseModel):
    message: str = "No changes made to lesson"
    lessonId: str


class LineItemIn(BaseModel):
    """One booked lesson. Extra fields (subject, price, ...) are stored as sent.

    A missing ``id`` is not a schema error; that line fails on its own when
    seats are reconciled.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    quantity: int = Field(default=1, ge=1)


class OrderCreateIn(BaseModel):
    """Incoming order. Extra fields are kept and stored with the order.

    ``name``, ``phone`` and ``lessons`` are optional here so that their
    absence is reported as a missing-fields error rather than a schema error.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    phone: str | None = None
    lessons: list[LineItemIn] | None = None

    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class LineItemOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    quantity: int


class OrderOut(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    order_id: str = Field(alias="orderId")
    name: str
    phone: str
    lessons: list[LineItemOut]
    created_at: dt.datetime = Field(alias="createdAt")


class SeatUpdatesOut(BaseModel):
    updated: int
    skipped: int
    failed: int


class OrderCreatedOut(BaseModel):
    success: bool = True
    message: str = "Order created successfully"
    orderId: str
    orderNumber: str
    seatUpdates: SeatUpdatesOut
