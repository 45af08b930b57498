"""
Unit tests for the menu and cart API endpoints.

The database session dependency is replaced with the in-memory test session.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from models.cart_item import CartItem
from models.menu import Menu
from models.menu_item import MenuItem


class TestApiRouter:

    @pytest.fixture
    def test_client(self, session):
        """Create FastAPI test client bound to the test session."""
        # Import here to avoid side effects
        from app import app
        from web.api_router import db_session

        async def override_session():
            yield session

        app.dependency_overrides[db_session] = override_session
        yield TestClient(app)
        app.dependency_overrides.clear()

    @pytest.fixture
    def footer_menu(self, session):
        menu = Menu(name="Footer Destinations", location="footer_destinations")
        session.add(menu)
        session.commit()
        session.add_all([
            MenuItem(id=1, menu_id=menu.id, title="Egypt", order_position=1),
            MenuItem(id=2, menu_id=menu.id, title="Cairo", parent_id=1, order_position=0),
            MenuItem(id=3, menu_id=menu.id, title="Dubai", order_position=0),
        ])
        session.commit()
        return menu

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_get_menu_by_location(self, test_client, footer_menu):
        response = test_client.get("/api/menus/location/footer_destinations")

        assert response.status_code == 200
        data = response.json()
        assert data["menu"]["name"] == "Footer Destinations"
        assert len(data["items"]) == 3
        assert [node["id"] for node in data["tree"]] == [3, 1]
        assert [child["title"] for child in data["tree"][1]["children"]] == ["Cairo"]

    def test_get_menu_unknown_location(self, test_client):
        response = test_client.get("/api/menus/location/header")

        assert response.status_code == 404
        assert "header" in response.json()["detail"]

    def test_get_cart_without_owner(self, test_client):
        response = test_client.get("/api/cart")

        assert response.status_code == 200
        data = response.json()
        assert data["totals"]["item_count"] == 0
        assert data["lines"] == []
        assert data["rejected"] == []

    def test_add_and_get_guest_cart(self, test_client):
        response = test_client.post("/api/cart/add", json={
            "session_id": "guest-123",
            "item_type": "tour",
            "item_id": 8,
            "item_name": "Pyramids Day Trip",
            "quantity": 2,
            "adults": 2,
            "price_at_add": "100",
            "discounted_price_at_add": "80",
            "configuration": {"slug": "pyramids-day-trip"}
        })
        assert response.status_code == 201
        assert response.json()["id"] is not None

        response = test_client.get("/api/cart", params={"session_id": "guest-123"})

        assert response.status_code == 200
        totals = response.json()["totals"]
        assert Decimal(totals["subtotal"]) == Decimal("160")
        assert Decimal(totals["discount_total"]) == Decimal("40")
        assert totals["item_count"] == 2
        assert response.json()["badge"] == "2"

    def test_add_to_cart_invalid_price(self, test_client):
        response = test_client.post("/api/cart/add", json={
            "user_id": 1,
            "item_type": "visa",
            "item_id": 3,
            "price_at_add": "-5"
        })

        assert response.status_code == 400

    def test_add_to_cart_unknown_type(self, test_client):
        response = test_client.post("/api/cart/add", json={
            "user_id": 1,
            "item_type": "cruise",
            "item_id": 3,
            "price_at_add": "5"
        })

        assert response.status_code == 422

    def test_get_cart_reports_rejected_rows(self, test_client, session):
        session.add_all([
            CartItem(user_id=4, item_type="package", item_id=1, quantity=1, price_at_add=Decimal("-5")),
            CartItem(user_id=4, item_type="room", item_id=2, quantity=3, price_at_add=Decimal("250")),
        ])
        session.commit()

        response = test_client.get("/api/cart", params={"user_id": 4})

        data = response.json()
        assert data["totals"]["item_count"] == 3
        assert [r["reason"] for r in data["rejected"]] == ["InvalidPrice"]

    def test_remove_requires_owner(self, test_client):
        response = test_client.delete("/api/cart/1")

        assert response.status_code == 401

    def test_remove_missing_item(self, test_client):
        response = test_client.delete("/api/cart/999", params={"user_id": 1})

        assert response.status_code == 404

    def test_clear_cart(self, test_client, session):
        session.add(CartItem(user_id=4, item_type="room", item_id=2, quantity=1, price_at_add=Decimal("250")))
        session.commit()

        response = test_client.delete("/api/cart/clear", params={"user_id": 4})

        assert response.status_code == 200
        assert response.json() == {"success": True, "removed": 1}

    def test_clear_cart_without_owner(self, test_client):
        response = test_client.delete("/api/cart/clear")

        assert response.status_code == 400

    def test_add_to_cart_negative_occupancy(self, test_client):
        response = test_client.post("/api/cart/add", json={
            "user_id": 1,
            "item_type": "hotel",
            "item_id": 3,
            "adults": -3,
            "children": -1,
            "price_at_add": "100"
        })

        assert response.status_code == 422

    def test_update_cart_item(self, test_client, session):
        item = CartItem(user_id=4, item_type="room", item_id=2, quantity=1, price_at_add=Decimal("250"))
        session.add(item)
        session.commit()

        response = test_client.patch(f"/api/cart/{item.id}", params={"user_id": 4}, json={
            "quantity": 2,
            "notes": "Sea view",
            "price_at_add": "1"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["quantity"] == 2
        assert data["notes"] == "Sea view"
        assert Decimal(data["price_at_add"]) == Decimal("250")

    def test_update_cart_item_bad_quantity(self, test_client, session):
        item = CartItem(user_id=4, item_type="room", item_id=2, quantity=1, price_at_add=Decimal("250"))
        session.add(item)
        session.commit()

        response = test_client.patch(f"/api/cart/{item.id}", params={"user_id": 4}, json={"quantity": 0})

        assert response.status_code == 400

    def test_update_cart_item_negative_occupancy(self, test_client):
        response = test_client.patch("/api/cart/1", params={"user_id": 4}, json={"infants": -1})

        assert response.status_code == 422

    def test_update_requires_owner(self, test_client):
        response = test_client.patch("/api/cart/1", json={"quantity": 2})

        assert response.status_code == 401

    def test_update_missing_item(self, test_client):
        response = test_client.patch("/api/cart/999", params={"user_id": 1}, json={"quantity": 2})

        assert response.status_code == 404
