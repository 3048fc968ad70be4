# backend/routes/cart.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from database import get_db
from utils.audit import write_log
from services.cart_service import CartService
from schemas.cart import CartAddItem, CartRemoveItem, CartUserRef, CartOut, CartActionResponse

router = APIRouter(prefix="/cart", tags=["Cart"])


def _action_response(svc: CartService, user_id: int, message: str = None) -> dict:
    # Every mutation answers with the server cart so the client can resync
    cart = svc.get_cart(user_id)
    return {"success": True, "message": message, **cart}


@router.get("/{user_id}", response_model=CartOut)
def get_cart(user_id: int, db: Session = Depends(get_db)):
    return CartService(db).get_cart(user_id)


@router.post("/add", response_model=CartActionResponse)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    svc.add_item(payload.user_id, payload.service_id, payload.quantity)

    out = _action_response(svc, payload.user_id, "Service added to cart")
    write_log(
        db,
        user_id=payload.user_id,
        action="CART_ADD",
        resource="cart",
        request=request,
        meta={"service_id": payload.service_id, "quantity": payload.quantity, "cart_items": len(out["items"])},
    )
    return out


@router.delete("/remove", response_model=CartActionResponse)
def remove_from_cart(
    payload: CartRemoveItem,
    request: Request,
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    svc.remove_item(payload.user_id, payload.service_id)

    out = _action_response(svc, payload.user_id)
    write_log(
        db,
        user_id=payload.user_id,
        action="CART_REMOVE",
        resource="cart",
        request=request,
        meta={"service_id": payload.service_id, "cart_items": len(out["items"])},
    )
    return out


@router.delete("/clear", response_model=CartActionResponse)
def clear_cart(
    payload: CartUserRef,
    request: Request,
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    svc.clear(payload.user_id)

    write_log(db, user_id=payload.user_id, action="CART_CLEAR", resource="cart", request=request)
    return _action_response(svc, payload.user_id, "Cart cleared")
