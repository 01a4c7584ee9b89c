from __future__ import annotations

import datetime as dt
import uuid
from typing import Any

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(String(36), primary_key=True, default=_new_id)
    subject = Column(String(120), nullable=False, index=True)
    location = Column(String(120), nullable=False)
    price = Column(Float, nullable=False)
    spaces = Column(Integer, nullable=False, default=0)  # remaining seats, never below 0
    image = Column(String(255), nullable=True)


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=_new_id)
    # Order number handed to the customer, distinct from the row id.
    order_id = Column(String(36), unique=True, nullable=False, default=_new_id)
    name = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=False)
    lessons = Column(JSON, nullable=False, default=list)  # [{"id": ..., "quantity": ...}]
    extra = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def as_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = dict(self.extra or {})
        doc.update(
            {
                "_id": self.id,
                "orderId": self.order_id,
                "name": self.name,
                "phone": self.phone,
                "lessons": list(self.lessons or []),
                "createdAt": self.created_at,
            }
        )
        return doc
