"""
Component tests for the back-office user list, user deletion and the audit log.
"""
from fastapi.testclient import TestClient

from models.cart import Cart
from models.order import Order
from models.users import User


class TestUserAdministration:

    def test_list_users(self, test_client: TestClient, customer, admin, admin_headers):
        response = test_client.get("/users", headers=admin_headers)

        assert response.status_code == 200
        assert [u["email"] for u in response.json()] == [customer.email, admin.email]

    def test_filter_by_role(self, test_client: TestClient, customer, admin, admin_headers):
        response = test_client.get("/users?role=admin", headers=admin_headers)
        assert [u["id"] for u in response.json()] == [admin.id]

    def test_search_by_email(self, test_client: TestClient, customer, other_customer, admin_headers):
        response = test_client.get("/users?q=ben", headers=admin_headers)
        assert [u["id"] for u in response.json()] == [other_customer.id]

    def test_users_list_requires_admin(self, test_client: TestClient, customer_headers):
        assert test_client.get("/users").status_code == 401
        assert test_client.get("/users", headers=customer_headers).status_code == 403

    def test_delete_user_removes_cart_and_orders(
        self, test_client: TestClient, db, customer, service, admin_headers
    ):
        customer_id = customer.id
        test_client.post("/cart/add", json={"userId": customer_id, "service_id": service.id})
        test_client.post("/orders/create", json={
            "userId": customer_id,
            "items": [{"service_id": service.id, "quantity": 1}],
            "delivery_address": "Main Street 1",
            "delivery_date": "2999-01-01",
        })

        response = test_client.delete(f"/users/{customer_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "anna@example.com"
        assert db.query(User).filter(User.id == customer_id).count() == 0
        assert db.query(Cart).filter(Cart.user_id == customer_id).count() == 0
        assert db.query(Order).filter(Order.user_id == customer_id).count() == 0

    def test_admin_cannot_delete_self(self, test_client: TestClient, admin, admin_headers):
        response = test_client.delete(f"/users/{admin.id}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "You cannot delete your own account"

    def test_delete_missing_user_is_404(self, test_client: TestClient, admin_headers):
        assert test_client.delete("/users/9999", headers=admin_headers).status_code == 404


class TestAuditLog:

    def test_business_events_are_logged(self, test_client: TestClient, customer, service, admin_headers):
        test_client.post("/cart/add", json={"userId": customer.id, "service_id": service.id})
        test_client.request("DELETE", "/cart/clear", json={"userId": customer.id})

        response = test_client.get("/logs?resource=cart", headers=admin_headers)

        assert response.status_code == 200
        page = response.json()
        assert page["total"] == 2
        assert {entry["action"] for entry in page["items"]} == {"CART_ADD", "CART_CLEAR"}
        assert all(entry["user_id"] == customer.id for entry in page["items"])

    def test_failed_login_is_logged(self, test_client: TestClient, customer, admin_headers):
        test_client.post("/auth/login", json={"email": customer.email, "password": "wrong-pw"})

        page = test_client.get("/logs?action=LOGIN&status=fail", headers=admin_headers).json()

        assert page["total"] == 1
        assert page["items"][0]["meta"] == {"email": customer.email}

    def test_logs_require_admin(self, test_client: TestClient, customer_headers):
        assert test_client.get("/logs").status_code == 401
        assert test_client.get("/logs", headers=customer_headers).status_code == 403
