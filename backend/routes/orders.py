# backend/routes/orders.py
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from utils.audit import write_log
from services.order_service import OrderService
from schemas.order import OrderCreatePayload, OrderCreateResponse, OrderResponse

router = APIRouter(prefix="/orders", tags=["Orders"])


# Place an order from the client's cart lines; prices are checked against the catalog
@router.post("/create", response_model=OrderCreateResponse)
def create_order(
    payload: OrderCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
):
    result = OrderService(db).create_order(
        user_id=payload.user_id,
        items=payload.items,
        delivery_address=payload.delivery_address,
        delivery_date=payload.delivery_date,
    )

    write_log(
        db, user_id=payload.user_id, action="ORDER_CREATE", resource="orders", request=request,
        meta={"order_id": result["order_id"], "total_amount": str(result["total_amount"]), "lines": len(payload.items)},
    )
    return {"success": True, **result}


# List a user's orders with their items, newest first
@router.get("/{user_id}", response_model=List[OrderResponse])
def list_user_orders(user_id: int, db: Session = Depends(get_db)):
    return OrderService(db).list_orders(user_id)
