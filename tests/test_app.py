"""
Tests for application-level endpoints.
"""

from fastapi import status


def test_root(client):
    """Test the welcome endpoint."""
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "Welcome to Library management server"
    assert data["docs"] == "/docs"


def test_health_check(client):
    """Test the health endpoint reports healthy."""
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["app"] == "Library Management API"


def test_cors_preflight(client):
    """Test browsers are allowed to call the API cross-origin."""
    response = client.options(
        "/api/books",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:3000")


def test_unknown_route(client):
    response = client.get("/api/borrow")

    assert response.status_code == status.HTTP_404_NOT_FOUND
