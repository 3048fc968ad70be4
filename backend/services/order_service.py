# backend/services/order_service.py
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session, joinedload

from database import transaction
from models.catalog import Service
from models.order import Order, OrderItem, ORDER_STATUS_NEW
from models.users import is_admin
from schemas.cart import MAX_LINE_QUANTITY
from schemas.order import OrderItemIn
from services.cart_service import clear_cart_items, find_cart, get_user_or_404
from utils.errors import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class OrderService:
    """
    Checkout and order history.

    An order freezes the catalog price of every line at the moment it is
    placed. Later price changes never touch existing orders.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_order(
        self,
        user_id: int,
        items: Sequence[OrderItemIn],
        delivery_address: Optional[str],
        delivery_date: Optional[date],
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        """
        Use case: turn the supplied cart lines into an order.

        1. Validates the payload and the caller's role (nothing is written yet)
        2. Reads the current catalog price of every line
        3. Inserts the order and its items and empties the user's cart,
           all in one transaction
        """
        if not items:
            raise ValidationError("Order must contain at least one item")
        if not delivery_address or not delivery_address.strip():
            raise ValidationError("Delivery address is required")
        if delivery_date is None:
            raise ValidationError("Delivery date is required")
        if delivery_date < (today or date.today()):
            raise ValidationError("Delivery date cannot be in the past")

        user = get_user_or_404(self.db, user_id)
        if is_admin(user):
            raise AuthorizationError("Administrators cannot place orders")

        with transaction(self.db):
            lines = self._price_lines(items)
            total_amount = sum((price * qty for _, qty, price in lines), Decimal("0.00"))

            order = Order(
                user_id=user_id,
                delivery_address=delivery_address.strip(),
                delivery_date=delivery_date,
                total_amount=total_amount,
                status=ORDER_STATUS_NEW,
            )
            self.db.add(order)
            self.db.add_all([
                OrderItem(order=order, service_id=service_id, quantity=qty, price_at_purchase=price)
                for service_id, qty, price in lines
            ])
            self.db.flush()
            order_id = order.id

            cart = find_cart(self.db, user_id)
            if cart:
                clear_cart_items(self.db, cart.id)

        logger.info(f"Order {order_id} created for user {user_id}, total {total_amount}")
        return {"order_id": order_id, "total_amount": total_amount}

    def _price_lines(self, items: Sequence[OrderItemIn]) -> List[tuple]:
        # Catalog prices are authoritative; a client price that disagrees is rejected
        ids = {it.service_id for it in items}
        services = {s.id: s for s in self.db.query(Service).filter(Service.id.in_(ids)).all()}

        lines = []
        for it in items:
            if it.quantity < 1:
                raise ValidationError("Quantity must be at least 1")
            if it.quantity > MAX_LINE_QUANTITY:
                raise ValidationError(f"Quantity cannot exceed {MAX_LINE_QUANTITY}")

            service = services.get(it.service_id)
            if service is None:
                raise NotFoundError(f"Service {it.service_id} not found")

            price = Decimal(service.price).quantize(CENT)
            if it.price is not None and Decimal(it.price).quantize(CENT) != price:
                raise ValidationError(
                    f"Price of service {service.id} has changed to {price}, please review your cart"
                )
            lines.append((service.id, it.quantity, price))
        return lines

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        orders = (
            self.db.query(Order)
            .options(joinedload(Order.items).joinedload(OrderItem.service))
            .filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )
        return [_order_to_dict(o) for o in orders]


# Map Order model to the OrderResponse shape
def _order_to_dict(order: Order) -> Dict[str, Any]:
    return {
        "order_id": order.id,
        "user_id": order.user_id,
        "delivery_address": order.delivery_address,
        "delivery_date": order.delivery_date,
        "total_amount": order.total_amount,
        "status": order.status,
        "order_date": order.created_at,
        "items": [
            {
                "service_id": it.service_id,
                "service_name": it.service.name if it.service else None,
                "quantity": it.quantity,
                "price": it.price_at_purchase,
            }
            for it in sorted(order.items, key=lambda i: i.id)
        ],
    }
