from __future__ import annotations

from fastapi.testclient import TestClient

from afterschool import __version__
from afterschool.core.errors import KNOWN_ROUTES
from afterschool.models.db import Base


def test_root_banner(client):
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "After School Classes API is running!"
    assert body["version"] == __version__
    assert "GET /lessons - Get all lessons" in body["endpoints"]
    assert len(body["endpoints"]) == 5
    assert body["timestamp"]


def test_unknown_route(client):
    r = client.get("/teachers")
    assert r.status_code == 404
    body = r.json()
    assert body["error"] == "Route not found"
    assert body["message"] == "The route GET /teachers does not exist"
    assert body["availableRoutes"] == KNOWN_ROUTES


def test_unsupported_method_is_an_unknown_route(client):
    r = client.delete("/lessons")
    assert r.status_code == 404
    assert r.json()["error"] == "Route not found"


def test_serves_images(client, images_dir):
    (images_dir / "math.png").write_bytes(b"\x89PNG fake")
    r = client.get("/images/math.png")
    assert r.status_code == 200
    assert r.content == b"\x89PNG fake"


def test_missing_image(client):
    r = client.get("/images/missing.png")
    assert r.status_code == 404
    assert r.json() == {
        "error": "Image not found",
        "message": "The requested image /missing.png does not exist",
    }


def test_store_failure_is_reported(client, database):
    Base.metadata.drop_all(bind=database.engine)

    r = client.get("/lessons")
    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Failed to fetch lessons"
    assert "lessons" in body["message"]

    r = client.get("/search", params={"query": "math"})
    assert r.status_code == 500
    assert r.json()["error"] == "Search failed"

    r = client.get("/orders")
    assert r.status_code == 500
    assert r.json()["error"] == "Failed to fetch orders"

    r = client.post("/orders", json={"name": "Ada", "phone": "0", "lessons": []})
    assert r.status_code == 500
    assert r.json()["error"] == "Failed to create order"


def test_unhandled_error(app):
    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.get("/boom")

    assert r.status_code == 500
    assert r.json() == {
        "error": "Internal server error",
        "message": "Something went wrong on the server",
    }


def test_startup_creates_images_dir(client, images_dir):
    assert images_dir.is_dir()
