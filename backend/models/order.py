from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

ORDER_STATUS_NEW = "new"

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    status = Column(String, nullable=False, default=ORDER_STATUS_NEW)
    # Fixed when the order is placed, never recomputed from the catalog
    total_amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Delivery details
    delivery_address = Column(String, nullable=False)
    delivery_date = Column(Date, nullable=False)

    user = relationship("User", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")

class OrderItem(Base):
    __tablename__ = "order_items"
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    # Nulled when the service is removed from the catalog; the line keeps its price
    service_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False)
    price_at_purchase = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
    service = relationship("Service")
