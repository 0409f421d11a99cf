"""Tests for health endpoints"""
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "adminauth"


def test_liveness(client: TestClient):
    response = client.get("/health/live")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "alive"
    assert data["uptime_seconds"] >= 0


def test_readiness(client: TestClient):
    response = client.get("/health/ready")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] is True


def test_readiness_reports_database_outage(client: TestClient, db, monkeypatch):
    def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(db, "execute", broken_execute)

    response = client.get("/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["checks"]["database"] is False
