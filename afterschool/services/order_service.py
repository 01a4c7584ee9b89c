from __future__ import annotations

import datetime as dt
import logging
from uuid import uuid4

from sqlalchemy.orm import Session as DBSession

from ..core.errors import ClientError, store_errors
from ..models.db import Order
from ..models.entities import OrderPlacement
from ..models.schemas import OrderCreateIn
from .seat_service import SeatService

logger = logging.getLogger(__name__)

# Keys the store stamps on every order; clients cannot supply them.
_STAMPED_KEYS = {"_id", "orderId", "createdAt"}


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def require_order_fields(payload: OrderCreateIn) -> None:
    """Reject the order unless name, phone and lessons are all present.

    The checks run in that order and stop at the first failure.
    """
    missing = (
        _blank(payload.name)
        or _blank(payload.phone)
        or payload.lessons is None
    )
    if missing:
        raise ClientError("Missing required fields", "Order must include name, phone, and lessons")


class OrderService:
    @staticmethod
    def place_order(db: DBSession, payload: OrderCreateIn) -> OrderPlacement:
        require_order_fields(payload)
        items = list(payload.lessons or [])

        extra = {k: v for k, v in payload.extra_fields().items() if k not in _STAMPED_KEYS}
        order = Order(
            order_id=str(uuid4()),
            name=payload.name,
            phone=payload.phone,
            lessons=[item.model_dump() for item in items],
            extra=extra,
            created_at=dt.datetime.now(dt.timezone.utc),
        )
        logger.info(
            f"Order details: name={order.name!r} phone={order.phone!r} "
            f"lessons={len(items)} orderId={order.order_id}"
        )

        with store_errors("Failed to create order"):
            db.add(order)
            db.commit()
            db.refresh(order)
        logger.info(f"Order saved successfully with ID: {order.id}")

        # The order stays saved whatever happens to the seat counts.
        seats = SeatService.reconcile_seats(db, items)
        if seats.failed or seats.skipped:
            logger.warning(f"Order {order.order_id} placed with incomplete seat updates: {seats.summary()}")

        return OrderPlacement(order=order, seats=seats)

    @staticmethod
    def list_orders(db: DBSession) -> list[Order]:
        with store_errors("Failed to fetch orders"):
            orders = db.query(Order).order_by(Order.created_at.desc()).all()
        logger.info(f"Found {len(orders)} orders")
        return orders
