# backend/services/cart_service.py
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import transaction
from models.cart import Cart, CartItem
from models.catalog import Service
from models.users import User, is_admin
from schemas.cart import MAX_LINE_QUANTITY
from utils.errors import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT support
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def find_cart(db: Session, user_id: int) -> Optional[Cart]:
    return db.query(Cart).filter(Cart.user_id == user_id).first()


def get_or_create_cart(db: Session, user_id: int) -> Cart:
    """
    Fetch the user's cart, creating it if needed.

    Two requests may both see "no cart" and race to create one. The unique
    index on carts.user_id decides the winner; the loser's insert becomes a
    no-op and it selects the winner's row.
    """
    cart = find_cart(db, user_id)
    if cart:
        return cart

    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(Cart).values(user_id=user_id).on_conflict_do_nothing(index_elements=["user_id"])
        db.execute(stmt)
    else:
        try:
            with db.begin_nested():
                db.add(Cart(user_id=user_id))
        except IntegrityError:
            logger.info(f"Cart for user {user_id} was created concurrently")

    return db.query(Cart).filter(Cart.user_id == user_id).one()


class CartService:
    """
    Cart use cases. Every command runs as one transaction: either all of its
    statements are applied or none are.
    """

    def __init__(self, db: Session):
        self.db = db

    # query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = find_cart(self.db, user_id)
        if not cart:
            return {"items": [], "total": Decimal("0.00")}

        rows = (
            self.db.query(CartItem, Service)
            .join(Service, CartItem.service_id == Service.id)
            .filter(CartItem.cart_id == cart.id)
            .order_by(CartItem.id)
            .all()
        )

        items = [
            {
                "cart_item_id": item.id,
                "service_id": item.service_id,
                "quantity": item.quantity,
                "name": service.name,
                "price": service.price,
                "duration": service.duration,
                "image_url": service.image_url,
            }
            for item, service in rows
        ]
        total = sum((service.price * item.quantity for item, service in rows), Decimal("0.00"))
        return {"items": items, "total": total}

    # commands
    def add_item(self, user_id: int, service_id: int, quantity: int = 1) -> None:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        if quantity > MAX_LINE_QUANTITY:
            raise ValidationError(f"Quantity cannot exceed {MAX_LINE_QUANTITY}")

        with transaction(self.db):
            user = get_user_or_404(self.db, user_id)
            if is_admin(user):
                raise AuthorizationError("Administrators cannot add services to a cart")

            service = self.db.query(Service.id).filter(Service.id == service_id).first()
            if not service:
                raise NotFoundError("Service not found")

            cart = get_or_create_cart(self.db, user_id)

            # Merge into the existing line with a single UPDATE so that
            # concurrent adds accumulate instead of overwriting each other
            updated = (
                self.db.query(CartItem)
                .filter(CartItem.cart_id == cart.id, CartItem.service_id == service_id)
                .filter(CartItem.quantity <= MAX_LINE_QUANTITY - quantity)
                .update({CartItem.quantity: CartItem.quantity + quantity}, synchronize_session=False)
            )
            # The line exists but the merged quantity would pass the cap
            if not updated and self._has_line(cart.id, service_id):
                raise ValidationError(f"Quantity cannot exceed {MAX_LINE_QUANTITY}")

            if updated:
                logger.info(f"Service {service_id} already in cart {cart.id}, quantity +{quantity}")
            else:
                logger.info(f"Adding service {service_id} to cart {cart.id}")
                self.db.add(CartItem(cart_id=cart.id, service_id=service_id, quantity=quantity))

    def _has_line(self, cart_id: int, service_id: int) -> bool:
        return self.db.query(CartItem.id).filter(
            CartItem.cart_id == cart_id, CartItem.service_id == service_id
        ).first() is not None

    def remove_item(self, user_id: int, service_id: int) -> None:
        with transaction(self.db):
            cart = find_cart(self.db, user_id)
            if not cart:
                return

            removed = (
                self.db.query(CartItem)
                .filter(CartItem.cart_id == cart.id, CartItem.service_id == service_id)
                .delete(synchronize_session=False)
            )
            logger.info(f"Removed {removed} line(s) of service {service_id} from cart {cart.id}")

    def clear(self, user_id: int) -> None:
        with transaction(self.db):
            cart = find_cart(self.db, user_id)
            if not cart:
                return
            clear_cart_items(self.db, cart.id)


def clear_cart_items(db: Session, cart_id: int) -> int:
    removed = (
        db.query(CartItem)
        .filter(CartItem.cart_id == cart_id)
        .delete(synchronize_session=False)
    )
    logger.info(f"Cleared {removed} line(s) from cart {cart_id}")
    return removed
