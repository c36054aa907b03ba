"""Unit tests for HTTP endpoints."""
from app.core.dependencies import get_index_cache
from app.main import app


class TestParseOrderAPI:
    """Test POST /api/orders/parse."""

    def test_parse_success(self, test_client):
        response = test_client.post(
            "/api/orders/parse",
            json={"restaurantKey": "test", "utterance": "can i get the chicken parm with extra cheese"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["match"]["item"]["name"] == "Chicken Parmesan"
        assert data["match"]["calculatedPrice"] == 17.49
        assert data["match"]["matchedModifiers"] == [
            {"groupName": "Add Extras", "optionName": "Extra Cheese", "optionPrice": 1.5}
        ]
        assert "alternativeMatches" in data

    def test_parse_empty_utterance(self, test_client):
        response = test_client.post(
            "/api/orders/parse", json={"restaurantKey": "test", "utterance": "um yeah please"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["errorCode"] == "empty_utterance"
        assert data["alternativeMatches"] == []

    def test_parse_unknown_restaurant(self, test_client):
        """Test a missing menu still yields a well-formed result."""
        response = test_client.post(
            "/api/orders/parse", json={"restaurantKey": "missing", "utterance": "burger"}
        )

        assert response.status_code == 200
        assert response.json()["errorCode"] == "index_unavailable"

    def test_parse_requires_utterance(self, test_client):
        response = test_client.post("/api/orders/parse", json={"restaurantKey": "test"})
        assert response.status_code == 422


class TestMenuAPI:
    """Test menu endpoints."""

    def test_get_menu(self, test_client):
        response = test_client.get("/api/menu/test")

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data["categories"]] == ["Pizza", "Entrees", "Sandwiches"]
        assert data["categories"][0]["items"][0]["price"] == 12.99

    def test_get_menu_not_found(self, test_client):
        assert test_client.get("/api/menu/missing").status_code == 404

    def test_get_menu_item(self, test_client):
        response = test_client.get("/api/menu/test/items/turkey club")

        assert response.status_code == 200
        assert response.json()["modifiers"][0]["name"] == "Bread Choice"

    def test_get_menu_item_not_found(self, test_client):
        assert test_client.get("/api/menu/test/items/lobster roll").status_code == 404


class TestMenuWebhook:
    """Test POST /webhooks/menu-updated."""

    def test_invalidates_one_restaurant(self, test_client):
        test_client.post("/api/orders/parse", json={"restaurantKey": "test", "utterance": "burger"})
        cache = app.dependency_overrides[get_index_cache]()
        assert "test" in cache

        response = test_client.post("/webhooks/menu-updated", json={"restaurantKey": "test"})

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "invalidated": "test"}
        assert "test" not in cache

    def test_invalidates_all(self, test_client):
        test_client.post("/api/orders/parse", json={"restaurantKey": "test", "utterance": "burger"})
        cache = app.dependency_overrides[get_index_cache]()

        response = test_client.post("/webhooks/menu-updated", json={})

        assert response.json()["invalidated"] == "all"
        assert "test" not in cache

    def test_parse_after_invalidation(self, test_client):
        test_client.post("/webhooks/menu-updated", json={"restaurantKey": "test"})
        response = test_client.post(
            "/api/orders/parse", json={"restaurantKey": "test", "utterance": "margherita pizza"}
        )

        assert response.json()["match"]["item"]["name"] == "Margherita Pizza"


class TestHealth:
    """Test health endpoint."""

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
