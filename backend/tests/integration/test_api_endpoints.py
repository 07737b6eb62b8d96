"""
Integration tests for the chat API endpoints.

WHAT: Tests for conversation, messaging, negotiation and status endpoints
WHY: Ensure API contract compliance and error handling
HOW: FastAPI TestClient against the real app and conversation manager
"""

import pytest
from fastapi.testclient import TestClient

from shopmate.main import app


@pytest.fixture
def client():
    """Create FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def conversation_id(client):
    response = client.post("/api/v1/conversations")
    assert response.status_code == 201
    return response.json()["conversation_id"]


@pytest.fixture
def product_payload():
    return {"id": "sku-kurta-001", "name": "Cotton Kurta", "price": 1000}


@pytest.mark.integration
class TestStatusEndpoints:
    """Test status endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client, conversation_id):
        data = client.get("/api/v1/health").json()

        assert data["status"] == "healthy"
        assert data["conversations"] == 1
        assert data["supported_languages"] == ["en", "hi", "kn"]


@pytest.mark.integration
class TestConversationEndpoints:
    """Test conversation endpoints."""

    def test_create_conversation(self, client):
        response = client.post("/api/v1/conversations")

        assert response.status_code == 201
        data = response.json()
        assert data["is_open"] is False
        assert data["negotiation"] is None
        assert len(data["messages"]) == 1
        assert data["messages"][0]["sender"] == "bot"

    def test_get_unknown_conversation(self, client):
        response = client.get("/api/v1/conversations/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "CONVERSATION_NOT_FOUND"

    def test_delete_conversation(self, client, conversation_id):
        response = client.delete(f"/api/v1/conversations/{conversation_id}")
        assert response.status_code == 200

        response = client.get(f"/api/v1/conversations/{conversation_id}")
        assert response.status_code == 404

    def test_visibility_toggle_and_set(self, client, conversation_id):
        url = f"/api/v1/conversations/{conversation_id}/visibility"

        assert client.post(url, json={}).json()["is_open"] is True
        assert client.post(url, json={"open": None}).json()["is_open"] is False
        assert client.post(url, json={"open": True}).json()["is_open"] is True
        assert client.post(url, json={"open": False}).json()["is_open"] is False


@pytest.mark.integration
class TestMessageEndpoints:
    """Test sending messages."""

    def test_routing_reply(self, client, conversation_id):
        response = client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={"text": "show me electronics"},
        )

        assert response.status_code == 200
        reply = response.json()["reply"]
        assert reply["kind"] == "navigation"
        assert reply["navigation"] == {
            "route": "/electronics",
            "destination": "electronics",
            "delay_ms": 1000,
        }
        assert reply["reply_delay_ms"] == 500
        assert reply["text"].endswith("[ROUTE:/electronics]")

    def test_help_reply(self, client, conversation_id):
        reply = client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={"text": "blah blah"},
        ).json()["reply"]

        assert reply["kind"] == "help"
        assert reply["navigation"] is None

    def test_blank_message_is_ignored(self, client, conversation_id):
        response = client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={"text": "   "},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["reply"] is None
        assert len(data["messages"]) == 1

    def test_missing_text_is_validation_error(self, client, conversation_id):
        response = client.post(
            f"/api/v1/conversations/{conversation_id}/messages",
            json={},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.integration
class TestNegotiationEndpoints:
    """Test negotiation endpoints."""

    def test_start_negotiation(self, client, conversation_id, product_payload):
        response = client.post(
            f"/api/v1/conversations/{conversation_id}/negotiation",
            json={"product": product_payload},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["negotiation"]["min_price"] == 800
        assert data["negotiation"]["round"] == 0
        assert data["negotiation"]["active"] is True
        assert "Cotton Kurta" in data["messages"][-1]["text"]

        conversation = client.get(f"/api/v1/conversations/{conversation_id}").json()
        assert conversation["is_open"] is True

    def test_counteroffer_and_deal(self, client, conversation_id, product_payload):
        base = f"/api/v1/conversations/{conversation_id}"
        client.post(f"{base}/negotiation", json={"product": product_payload})

        offer = client.post(f"{base}/messages", json={"text": "too pricey"}).json()["reply"]
        assert offer["kind"] == "counteroffer"
        assert offer["outcome"] == {
            "kind": "counteroffer", "offer": 920, "discount_percent": 8.0, "round": 1,
        }

        state = client.get(f"{base}/negotiation").json()
        assert state["round"] == 1
        assert state["last_offer"] == 920

        deal = client.post(f"{base}/messages", json={"text": "yes"}).json()["reply"]
        assert deal["kind"] == "deal_confirmed"
        assert deal["outcome"]["agreed_price"] == 920

        response = client.get(f"{base}/negotiation")
        assert response.status_code == 409
        assert response.json()["error"] == "NEGOTIATION_NOT_ACTIVE"

    def test_cancel_negotiation(self, client, conversation_id, product_payload):
        base = f"/api/v1/conversations/{conversation_id}"
        client.post(f"{base}/negotiation", json={"product": product_payload})

        response = client.delete(f"{base}/negotiation")

        assert response.status_code == 200
        assert response.json()["active"] is False
        assert client.get(f"{base}/negotiation").status_code == 409

    def test_cancel_when_idle_succeeds(self, client, conversation_id):
        response = client.delete(f"/api/v1/conversations/{conversation_id}/negotiation")
        assert response.status_code == 200

    def test_custom_cap_and_language(self, client, conversation_id, product_payload):
        response = client.post(
            f"/api/v1/conversations/{conversation_id}/negotiation",
            json={"product": product_payload, "max_discount_percent": 10, "language": "hi"},
        )

        data = response.json()
        assert data["negotiation"]["min_price"] == 900
        assert data["negotiation"]["language"] == "hi"

    def test_unsupported_language(self, client, conversation_id, product_payload):
        response = client.post(
            f"/api/v1/conversations/{conversation_id}/negotiation",
            json={"product": product_payload, "language": "fr"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_zero_price_product(self, client, conversation_id):
        response = client.post(
            f"/api/v1/conversations/{conversation_id}/negotiation",
            json={"product": {"id": "free", "name": "Freebie", "price": 0}},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_PRODUCT"

    def test_cap_out_of_range(self, client, conversation_id, product_payload):
        response = client.post(
            f"/api/v1/conversations/{conversation_id}/negotiation",
            json={"product": product_payload, "max_discount_percent": 150},
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("price", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_price_is_rejected(self, client, conversation_id, price):
        body = '{"product": {"id": "p", "name": "P", "price": %s}}' % price

        response = client.post(
            f"/api/v1/conversations/{conversation_id}/negotiation",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["details"][0]["loc"][-1] == "price"

        state = client.get(f"/api/v1/conversations/{conversation_id}/negotiation")
        assert state.status_code == 409

    def test_configured_language_without_templates(
        self, client, conversation_id, product_payload, monkeypatch
    ):
        from shopmate.core.config import settings

        monkeypatch.setattr(settings, "SUPPORTED_LANGUAGES", "en,hi,kn,ta")

        response = client.post(
            f"/api/v1/conversations/{conversation_id}/negotiation",
            json={"product": product_payload, "language": "ta"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_language_disabled_in_settings(
        self, client, conversation_id, product_payload, monkeypatch
    ):
        from shopmate.core.config import settings

        monkeypatch.setattr(settings, "SUPPORTED_LANGUAGES", "en,hi")

        response = client.post(
            f"/api/v1/conversations/{conversation_id}/negotiation",
            json={"product": product_payload, "language": "kn"},
        )

        assert response.status_code == 400
        assert response.json()["details"]["field_errors"][0]["field"] == "language"


@pytest.mark.integration
class TestLifespan:
    """Test startup and shutdown hooks."""

    def test_sweeper_runs_while_app_is_up(self):
        with TestClient(app) as client:
            sweeper = app.state.sweeper
            assert not sweeper.done()
            client.post("/api/v1/conversations")

        assert sweeper.cancelled()
