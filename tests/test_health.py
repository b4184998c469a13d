"""
Health check endpoint tests.
"""

from fastapi.testclient import TestClient

from repbook.main import app


def test_health_endpoint():
    """Basic health check needs no database."""
    client = TestClient(app)
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "repbook"}


def test_liveness_endpoint():
    client = TestClient(app)
    assert client.get("/api/health/live").json() == {"status": "alive"}


def test_root_redirects():
    client = TestClient(app)
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] in ("/docs", "/api/health")
