"""
Component tests for registration, login and profile management.
"""
from fastapi.testclient import TestClient

from models.cart import Cart
from models.users import User

PASSWORD = "secret123"  # matches the fixture users in conftest.py


def _register(client, email="new@example.com", password="pass1234", **extra):
    body = {"email": email, "password": password, "full_name": "New Customer"}
    body.update(extra)
    return client.post("/auth/register", json=body)


class TestRegister:

    def test_register_creates_customer_with_cart(self, test_client: TestClient, db):
        response = _register(test_client, email="New@Example.com", phone="123456789")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "new@example.com"
        assert user["role_id"] == 1
        assert user["role_name"] == "customer"
        assert user["phone"] == "123456789"
        assert "password" not in user
        assert "password_hash" not in user

        assert db.query(Cart).filter(Cart.user_id == user["id"]).count() == 1

    def test_password_is_stored_hashed(self, test_client: TestClient, db):
        _register(test_client, password="plaintext-pw")

        stored = db.query(User).filter(User.email == "new@example.com").one()
        assert stored.password_hash != "plaintext-pw"
        assert "plaintext-pw" not in stored.password_hash

    def test_duplicate_email_is_400(self, test_client: TestClient, db, customer):
        response = _register(test_client, email=customer.email.upper())

        assert response.status_code == 400
        assert response.json()["detail"] == "Email already registered"
        assert db.query(User).count() == 1

    def test_short_password_is_400(self, test_client: TestClient):
        assert _register(test_client, password="123").status_code == 400

    def test_invalid_email_is_400(self, test_client: TestClient):
        assert _register(test_client, email="not-an-email").status_code == 400


class TestLogin:

    def test_login_returns_token_and_user(self, test_client: TestClient, customer):
        response = test_client.post("/auth/login", json={"email": customer.email, "password": PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["id"] == customer.id

        me = test_client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == customer.email

    def test_wrong_password_is_401(self, test_client: TestClient, customer):
        response = test_client.post("/auth/login", json={"email": customer.email, "password": "wrong-pw"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_unknown_email_is_401(self, test_client: TestClient):
        response = test_client.post("/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
        assert response.status_code == 401

    def test_me_without_token_is_401(self, test_client: TestClient):
        assert test_client.get("/auth/me").status_code == 401

    def test_me_with_garbage_token_is_401(self, test_client: TestClient):
        response = test_client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestProfile:

    def test_update_changes_only_given_fields(self, test_client: TestClient, customer):
        response = test_client.put("/users/profile", json={
            "userId": customer.id,
            "phone": "555-0100",
            "default_address": "Oak Street 5",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["phone"] == "555-0100"
        assert data["default_address"] == "Oak Street 5"
        assert data["full_name"] == "Anna Customer"
        assert data["email"] == "anna@example.com"

    def test_email_taken_by_another_user_is_400(self, test_client: TestClient, db, customer, other_customer):
        response = test_client.put("/users/profile", json={
            "userId": customer.id,
            "email": other_customer.email,
        })

        assert response.status_code == 400
        db.expire_all()
        assert db.query(User).filter(User.id == customer.id).one().email == "anna@example.com"

    def test_keeping_own_email_is_allowed(self, test_client: TestClient, customer):
        response = test_client.put("/users/profile", json={
            "user_id": customer.id,
            "email": "ANNA@example.com",
            "full_name": "Anna Renamed",
        })

        assert response.status_code == 200
        assert response.json()["full_name"] == "Anna Renamed"

    def test_unknown_user_is_404(self, test_client: TestClient):
        response = test_client.put("/users/profile", json={"userId": 9999, "phone": "1"})
        assert response.status_code == 404
