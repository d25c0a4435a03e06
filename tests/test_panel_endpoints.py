"""Tests for the panel endpoints."""

from fastapi.testclient import TestClient

from pulse_dashboard.api.app import create_app
from pulse_dashboard.domain.errors import FetchError
from tests.conftest import product_payload


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ip_info_state_before_load(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/ip-info")

    assert response.status_code == 200
    data = response.json()
    assert data["data"] is None
    assert data["loading"] is False
    assert data["updated_ago"] is None


def test_ip_info_refresh_returns_loaded_state(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/ip-info/refresh")

    assert response.status_code == 200
    data = response.json()
    assert data["data"]["ip"] == "203.0.113.7"
    assert data["error"] is None
    assert data["refreshing"] is False
    assert client.get("/ip-info").json()["data"]["city"] == "Shanghai"


def test_ip_info_refresh_failure_surfaces_error(container, ip_client) -> None:
    ip_client.responses = [FetchError("Request failed: 503", status_code=503)]
    client = TestClient(create_app(container))

    data = client.post("/ip-info/refresh").json()

    assert data["error"] == "Request failed: 503"
    assert data["data"] is None


def test_product_refresh_and_retry(container, product_client) -> None:
    client = TestClient(create_app(container))

    failed = client.post("/products/555/refresh").json()
    assert failed["error"] == "Request failed: 404"
    assert failed["requested_key"] == "555"

    product_client.payloads["555"] = product_payload("555", price="99.00")
    retried = client.post("/products/retry").json()

    assert retried["error"] is None
    assert retried["key"] == "555"
    assert retried["data"]["data"]["currentPrice"]["price"] == "99.00"


def test_product_refresh_rejects_blank_sku(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/products/%20/refresh")

    assert response.status_code == 422


def test_lifespan_mounts_both_panels(container) -> None:
    with TestClient(create_app(container)) as client:
        ip_state = client.get("/ip-info").json()
        product_state = client.get("/products").json()

    assert ip_state["data"]["ip"] == "203.0.113.7"
    assert product_state["key"] == "100209267857"


def test_dashboard_ui_served(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/ui")

    assert response.status_code == 200
    assert "Pulse Dashboard" in response.text
