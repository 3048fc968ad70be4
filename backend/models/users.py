# backend/models/users.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func
from sqlalchemy.orm import Session, relationship
from database import Base

CUSTOMER_ROLE_ID = 1
ADMIN_ROLE_ID = 2

ROLE_NAMES = {
    CUSTOMER_ROLE_ID: "customer",
    ADMIN_ROLE_ID: "admin",
}


# System role; ids are fixed and seeded by init_db
class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)


# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    default_address = Column(String, nullable=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, default=CUSTOMER_ROLE_ID)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    role = relationship("Role", lazy="joined")

    # Everything the user owns goes away with the account
    cart = relationship("Cart", back_populates="user", uselist=False, cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="user", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan")

    @property
    def role_name(self):
        if self.role is not None:
            return self.role.name
        return ROLE_NAMES.get(self.role_id)


def is_admin(user) -> bool:
    """Single capability check for back-office access; admins cannot shop."""
    return user is not None and user.role_id == ADMIN_ROLE_ID


def seed_roles(db: Session):
    existing = {r.id for r in db.query(Role).all()}
    missing = [Role(id=rid, name=name) for rid, name in ROLE_NAMES.items() if rid not in existing]
    if missing:
        db.add_all(missing)
        db.commit()
