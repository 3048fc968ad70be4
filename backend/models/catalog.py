# backend/models/catalog.py
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


# Groups services shown in the shop sidebar
class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

    services = relationship("Service", back_populates="category")


# Model Service
# A single bookable catalog item. The price is the current list price;
# orders keep their own copy in OrderItem.price_at_purchase.
class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)
    price = Column(Numeric(10, 2), CheckConstraint("price >= 0"), nullable=False)

    # Free-form label such as "2 hours"
    duration = Column(String, nullable=True)
    image_url = Column(String, nullable=True)

    category_id = Column(Integer, ForeignKey("categories.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category = relationship("Category", back_populates="services", lazy="joined")

    @property
    def category_name(self):
        return self.category.name if self.category else None
