from fastapi.testclient import TestClient

from fixgeni.core.middleware import SECURITY_HEADERS
from fixgeni.db import repository
from fixgeni.main import create_app
from fixgeni.models.category import Category


def test_health_is_plain_ok(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.text == "ok"
    assert resp.headers["content-type"].startswith("text/plain")


def test_health_variants(client):
    assert client.get("/_health").json() == {"ok": True}
    assert client.get("/").text == "FixGeni API is running"


def test_health_does_not_touch_the_store(settings, two_categories):
    # Store built but never initialised: any store access would raise.
    app = create_app(
        settings.model_copy(update={"database_url": "sqlite:///:memory:", "auto_create_schema": False}),
        catalog=two_categories,
    )
    app.state.store.init = lambda: None

    with TestClient(app) as client:
        assert client.get("/health").text == "ok"


def test_security_headers_are_set(client):
    resp = client.get("/health")

    for name, value in SECURITY_HEADERS.items():
        assert resp.headers[name] == value


def test_cors_reflects_origin_by_default(client):
    resp = client.options(
        "/api/kb/categories",
        headers={"Origin": "https://fixgeni.example", "Access-Control-Request-Method": "GET"},
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "https://fixgeni.example"
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_cors_respects_configured_origins(settings, store, two_categories):
    app = create_app(
        settings.model_copy(update={"cors_origins": ["https://app.fixgeni.example"]}),
        store=store,
        catalog=two_categories,
    )

    with TestClient(app) as client:
        allowed = client.get("/health", headers={"Origin": "https://app.fixgeni.example"})
        other = client.get("/health", headers={"Origin": "https://evil.example"})

    assert allowed.headers["access-control-allow-origin"] == "https://app.fixgeni.example"
    assert "access-control-allow-origin" not in other.headers


def test_oversized_body_is_rejected(settings, store, two_categories):
    app = create_app(settings.model_copy(update={"max_body_bytes": 64}), store=store, catalog=two_categories)

    with TestClient(app) as client:
        resp = client.post("/api/categories", json={"name": "x" * 200})

    assert resp.status_code == 413


def test_oversized_chunked_body_is_rejected(settings, store, two_categories, db):
    app = create_app(settings.model_copy(update={"max_body_bytes": 64}), store=store, catalog=two_categories)

    def chunks():
        yield b'{"name": "'
        yield b"x" * 100
        yield b'"}'

    with TestClient(app) as client:
        resp = client.post("/api/categories", content=chunks(), headers={"Content-Type": "application/json"})
        assert repository.count(db, Category) == 0

    assert resp.status_code == 413


def test_chunked_body_within_limit_reaches_the_route(settings, store, two_categories):
    app = create_app(settings.model_copy(update={"max_body_bytes": 64}), store=store, catalog=two_categories)

    def chunks():
        yield b'{"name": '
        yield b'"Attic"}'

    with TestClient(app) as client:
        resp = client.post("/api/categories", content=chunks(), headers={"Content-Type": "application/json"})

    assert resp.status_code == 201
    assert resp.json()["slug"] == "attic"
