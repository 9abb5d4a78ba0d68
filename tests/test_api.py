import logging
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

import nix_sample
from nix_sample.api import app


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Nix Sample API"
    assert body["version"] == nix_sample.__version__
    assert body["description"]
    assert set(body["endpoints"]) == {"/", "/health", "/api/info"}


def test_health(client, monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["environment"] == "development"
    assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00")).tzinfo


def test_health_reads_environment_per_request(client, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    assert client.get("/health").json()["environment"] == "production"
    monkeypatch.setenv("ENVIRONMENT", "staging")
    assert client.get("/health").json()["environment"] == "staging"


def test_info(client):
    response = client.get("/api/info")
    assert response.status_code == 200
    body = response.json()
    assert set(body) == {
        "python_version",
        "platform",
        "arch",
        "uptime",
        "memory",
        "environment",
    }
    assert body["uptime"] >= 0
    assert set(body["memory"]) == {"rss", "max_rss"}
    assert all(value.endswith("MB") for value in body["memory"].values())


def test_cors(client):
    response = client.get("/health", headers={"Origin": "http://localhost:3000"})
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize("path", ["/", "/health", "/api/info"])
def test_routes_are_get_only(client, path):
    assert client.post(path).status_code == 405


def test_startup_and_shutdown_are_logged(caplog):
    caplog.set_level(logging.INFO, logger="nix_sample.api")
    with TestClient(app):
        assert "API server started" in caplog.text
        for path in ["/", "/health", "/api/info"]:
            assert f"GET {path}" in caplog.text
        assert "Closing HTTP server" not in caplog.text
    assert "Closing HTTP server" in caplog.text
