"""Liveness and readiness."""

API = "/api/v1"


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_health(client):
    assert client.get(f"{API}/health").json()["status"] == "ok"


def test_ready_checks_database(client):
    response = client.get(f"{API}/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}
