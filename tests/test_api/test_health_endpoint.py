"""Tests for the service status endpoints."""

import pytest


@pytest.mark.api
def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.api
def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["name"] == "Soudou API"


@pytest.mark.api
def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "0f8e4c2a9b6d4e1f8a7b3c5d2e1f0a9b"})

    assert response.headers["X-Request-ID"] == "0f8e4c2a9b6d4e1f8a7b3c5d2e1f0a9b"


@pytest.mark.api
def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}
