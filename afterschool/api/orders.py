from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session as DBSession

from ..core.deps import get_db
from ..models.schemas import OrderCreatedOut, OrderCreateIn, OrderOut, SeatUpdatesOut
from ..services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderCreatedOut, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreateIn, db: DBSession = Depends(get_db)):
    placed = OrderService.place_order(db, payload)
    return OrderCreatedOut(
        orderId=placed.order.id,
        orderNumber=placed.order.order_id,
        seatUpdates=SeatUpdatesOut(**placed.seats.summary()),
    )


@router.get("", response_model=list[OrderOut])
def list_orders(db: DBSession = Depends(get_db)):
    return [OrderOut.model_validate(o.as_document()) for o in OrderService.list_orders(db)]
