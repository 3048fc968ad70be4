"""
Shared fixtures: an in-memory SQLite database replaces the application
database for every test, and the FastAPI app is driven through TestClient.
"""
import os

# Must be set before config/database are imported by the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from database import Base, get_db, init_db
from models.users import User, ADMIN_ROLE_ID, CUSTOMER_ROLE_ID
from models.catalog import Category, Service
from utils.hashing import get_password_hash
from utils.tokenJWT import create_access_token

PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def _make_user(db, email, full_name, role_id):
    user = User(
        email=email,
        password_hash=get_password_hash(PASSWORD),
        full_name=full_name,
        role_id=role_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def customer(db):
    return _make_user(db, "anna@example.com", "Anna Customer", CUSTOMER_ROLE_ID)


@pytest.fixture
def other_customer(db):
    return _make_user(db, "ben@example.com", "Ben Customer", CUSTOMER_ROLE_ID)


@pytest.fixture
def admin(db):
    return _make_user(db, "boss@example.com", "Admin Boss", ADMIN_ROLE_ID)


@pytest.fixture
def admin_headers(admin):
    token = create_access_token(data={"sub": admin.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(customer):
    token = create_access_token(data={"sub": customer.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def category(db):
    category = Category(name="Cleaning")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def service(db, category):
    service = Service(
        name="Window washing",
        description="Up to ten windows",
        price=Decimal("100.00"),
        duration="2 hours",
        category_id=category.id,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def cheap_service(db, category):
    service = Service(
        name="Carpet vacuuming",
        price=Decimal("25.50"),
        duration="1 hour",
        category_id=category.id,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service
