"""
Test health and root endpoints.
"""
from chromapick import __version__


def test_health_check(test_client):
    """Health endpoint reports service name and version."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["service"] == "chromapick"
    assert data["version"] == __version__


def test_root(test_client):
    response = test_client.get("/")

    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"
