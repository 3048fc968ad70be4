# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Represents the user's shopping cart
class Cart(Base):
    __tablename__ = "carts" # Table name

    id = Column(Integer, primary_key=True, index=True) # Primary key
    # One cart per user; the unique index makes lazy creation race-safe
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now()) # Creation timestamp

    user = relationship("User", back_populates="cart")

    # One-to-many relationship with cart items
    items = relationship("CartItem", back_populates="cart", cascade="all, delete-orphan")


# Represents a single item (service + quantity) within a cart
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), index=True, nullable=False) # Foreign key to parent cart
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), index=True, nullable=False) # Foreign key to service
    quantity = Column(Integer, nullable=False, default=1) # Service quantity

    cart = relationship("Cart", back_populates="items") # Relationship back to Cart
    service = relationship("Service", lazy="joined") # Relationship to Service

    __table_args__ = (
        # Unique constraint to prevent duplicate service entries in the same cart
        UniqueConstraint("cart_id", "service_id", name="uq_cartitem_cart_service"),
        CheckConstraint("quantity >= 1", name="ck_cartitem_quantity_positive"),
    )
