"""
Component tests for the public catalog, categories and reviews, including
the admin-only maintenance endpoints.
"""
from fastapi.testclient import TestClient

from models.catalog import Category, Service
from models.review import Review


def _service_body(category_id, **overrides):
    body = {
        "name": "Hedge trimming",
        "description": "Shaping and trimming",
        "price": "85.00",
        "duration": "3 hours",
        "category_id": category_id,
    }
    body.update(overrides)
    return body


class TestBrowseServices:

    def test_list_is_ordered_by_id_with_category_name(self, test_client: TestClient, service, cheap_service):
        data = test_client.get("/services").json()

        assert [s["id"] for s in data] == [service.id, cheap_service.id]
        assert data[0]["category_name"] == "Cleaning"
        assert data[0]["price"] == 100

    def test_filter_by_category(self, test_client: TestClient, db, service):
        garden = Category(name="Garden")
        db.add(garden)
        db.commit()

        assert test_client.get(f"/services?category_id={garden.id}").json() == []
        assert len(test_client.get(f"/services?category_id={service.category_id}").json()) == 1

    def test_single_service(self, test_client: TestClient, service):
        response = test_client.get(f"/services/{service.id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Window washing"

    def test_missing_service_is_404(self, test_client: TestClient):
        response = test_client.get("/services/9999")
        assert response.status_code == 404
        assert response.json() == {"detail": "Service not found"}


class TestAdminServices:

    def test_create_requires_token(self, test_client: TestClient, category):
        response = test_client.post("/services", json=_service_body(category.id))
        assert response.status_code == 401

    def test_create_rejects_customer(self, test_client: TestClient, category, customer_headers):
        response = test_client.post("/services", json=_service_body(category.id), headers=customer_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    def test_admin_creates_service(self, test_client: TestClient, db, category, admin_headers):
        response = test_client.post("/services", json=_service_body(category.id), headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Hedge trimming"
        assert data["price"] == 85
        assert data["category_name"] == "Cleaning"
        assert db.query(Service).count() == 1

    def test_unknown_category_is_404(self, test_client: TestClient, admin_headers):
        response = test_client.post("/services", json=_service_body(9999), headers=admin_headers)
        assert response.status_code == 404

    def test_negative_price_is_400(self, test_client: TestClient, category, admin_headers):
        response = test_client.post(
            "/services", json=_service_body(category.id, price="-1"), headers=admin_headers
        )
        assert response.status_code == 400

    def test_delete_removes_cart_lines_and_reviews(
        self, test_client: TestClient, db, customer, service, admin_headers
    ):
        service_id = service.id
        test_client.post("/cart/add", json={"userId": customer.id, "service_id": service_id})
        test_client.post(f"/services/{service_id}/reviews", json={"userId": customer.id, "rating": 5})

        response = test_client.delete(f"/services/{service_id}", headers=admin_headers)

        assert response.status_code == 200
        assert test_client.get(f"/services/{service_id}").status_code == 404
        assert test_client.get(f"/cart/{customer.id}").json()["items"] == []
        assert db.query(Review).count() == 0


class TestCategories:

    def test_list_categories(self, test_client: TestClient, category):
        assert test_client.get("/categories").json() == [{"id": category.id, "name": "Cleaning"}]

    def test_admin_crud(self, test_client: TestClient, admin_headers):
        created = test_client.post("/categories", json={"name": "Repairs"}, headers=admin_headers)
        assert created.status_code == 200
        category_id = created.json()["id"]

        renamed = test_client.put(f"/categories/{category_id}", json={"name": "Home repairs"}, headers=admin_headers)
        assert renamed.json()["name"] == "Home repairs"

        deleted = test_client.delete(f"/categories/{category_id}", headers=admin_headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"id": category_id, "name": "Home repairs"}
        assert test_client.get("/categories").json() == []

    def test_category_with_services_cannot_be_deleted(self, test_client: TestClient, service, admin_headers):
        response = test_client.delete(f"/categories/{service.category_id}", headers=admin_headers)

        assert response.status_code == 400
        assert len(test_client.get("/categories").json()) == 1

    def test_missing_category_is_404(self, test_client: TestClient, admin_headers):
        response = test_client.put("/categories/9999", json={"name": "X"}, headers=admin_headers)
        assert response.status_code == 404

    def test_customer_cannot_create(self, test_client: TestClient, customer_headers):
        response = test_client.post("/categories", json={"name": "Repairs"}, headers=customer_headers)
        assert response.status_code == 403


class TestReviews:

    def test_create_and_list_newest_first(self, test_client: TestClient, customer, other_customer, service):
        first = test_client.post(
            f"/services/{service.id}/reviews", json={"userId": customer.id, "rating": 4, "comment": "Good"}
        )
        second = test_client.post(
            f"/services/{service.id}/reviews", json={"userId": other_customer.id, "rating": 5}
        )
        assert first.status_code == 200
        assert first.json()["full_name"] == "Anna Customer"

        reviews = test_client.get(f"/services/{service.id}/reviews").json()
        assert [r["id"] for r in reviews] == [second.json()["id"], first.json()["id"]]
        assert reviews[1]["comment"] == "Good"

    def test_same_user_may_review_twice(self, test_client: TestClient, customer, service):
        for rating in (2, 4):
            response = test_client.post(
                f"/services/{service.id}/reviews", json={"userId": customer.id, "rating": rating}
            )
            assert response.status_code == 200

        assert len(test_client.get(f"/users/{customer.id}/reviews").json()) == 2

    def test_rating_out_of_range_is_400(self, test_client: TestClient, customer, service):
        response = test_client.post(f"/services/{service.id}/reviews", json={"userId": customer.id, "rating": 6})
        assert response.status_code == 400

    def test_review_of_missing_service_is_404(self, test_client: TestClient, customer):
        response = test_client.post("/services/9999/reviews", json={"userId": customer.id, "rating": 3})
        assert response.status_code == 404

    def test_review_by_missing_user_is_404(self, test_client: TestClient, service):
        response = test_client.post(f"/services/{service.id}/reviews", json={"userId": 9999, "rating": 3})
        assert response.status_code == 404

    def test_admin_lists_and_deletes_reviews(self, test_client: TestClient, customer, service, admin_headers):
        created = test_client.post(
            f"/services/{service.id}/reviews", json={"userId": customer.id, "rating": 1}
        ).json()

        all_reviews = test_client.get("/reviews/all", headers=admin_headers).json()
        assert all_reviews[0]["service_name"] == "Window washing"
        assert all_reviews[0]["full_name"] == "Anna Customer"

        response = test_client.delete(f"/reviews/{created['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert test_client.get(f"/services/{service.id}/reviews").json() == []

        assert test_client.delete(f"/reviews/{created['id']}", headers=admin_headers).status_code == 404

    def test_all_reviews_requires_admin(self, test_client: TestClient, customer_headers):
        assert test_client.get("/reviews/all").status_code == 401
        assert test_client.get("/reviews/all", headers=customer_headers).status_code == 403
