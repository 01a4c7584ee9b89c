from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .db import Order

LineStatus = Literal["updated", "skipped", "failed"]


@dataclass
class LineResult:
    lesson_id: str
    quantity: int
    status: LineStatus
    previous_spaces: int | None = None
    spaces: int | None = None
    detail: str | None = None


@dataclass
class ReconciliationReport:
    lines: list[LineResult] = field(default_factory=list)

    def _count(self, status: LineStatus) -> int:
        return sum(1 for line in self.lines if line.status == status)

    @property
    def updated(self) -> int:
        return self._count("updated")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")

    def summary(self) -> dict[str, int]:
        return {"updated": self.updated, "skipped": self.skipped, "failed": self.failed}


@dataclass
class OrderPlacement:
    order: Order
    seats: ReconciliationReport


@dataclass
class LessonUpdate:
    lesson_id: str
    modified_count: int
