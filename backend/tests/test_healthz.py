"""
Test health endpoint for Palette Studio.
"""


def test_health_check(test_client):
    """Test health check response fields."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()

    assert data["ok"] is True
    assert "version" in data
    assert data["service"] == "palette-studio"


def test_root(test_client):
    response = test_client.get("/")
    assert response.status_code == 200
    assert response.json()["health"] == "/healthz"
