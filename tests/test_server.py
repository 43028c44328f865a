# File: tests/test_server.py

"""
Request pipeline tests: origin policy, root/status endpoints, unmatched
API routes, body limits and the error handlers.
"""

import logging

from fastapi.testclient import TestClient

from winajaya.core.config import DEFAULT_ALLOWED_ORIGINS, Settings
from winajaya.main import create_application

ALLOWED = "http://localhost:5173"
FOREIGN = "https://evil.example.com"


def test_root_is_live(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.text == "🚀 Backend is live"
    assert resp.headers["content-type"].startswith("text/plain")


def test_root_ignores_origin_and_body(client):
    resp = client.request("GET", "/", headers={"Origin": FOREIGN}, content=b"ignored")
    assert resp.status_code == 200
    assert resp.text == "🚀 Backend is live"


def test_api_status(client):
    resp = client.get("/api")
    assert resp.status_code == 200
    data = resp.json()
    assert data["message"] == "🚀 API is running"
    assert data["environment"] == "development"
    assert data["cors"] == "enabled"
    assert data["allowedOrigins"] == DEFAULT_ALLOWED_ORIGINS
    assert data["timestamp"].endswith("Z")


def test_api_status_reports_environment(database, tmp_path):
    settings = Settings(environment="staging", database_url=database.url)
    client = TestClient(create_application(settings=settings, database=database))
    assert client.get("/api").json()["environment"] == "staging"


def test_allowed_origin_gets_cors_headers(client):
    resp = client.get("/api", headers={"Origin": ALLOWED})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == ALLOWED
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_missing_origin_is_allowed(client):
    resp = client.get("/api/users")
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-credentials"] == "true"
    assert "access-control-allow-origin" not in resp.headers


def test_foreign_origin_is_rejected(client):
    for method, path in [("GET", "/api"), ("GET", "/api/users"), ("POST", "/api/users")]:
        resp = client.request(method, path, headers={"Origin": FOREIGN})
        assert resp.status_code == 403
        assert resp.json() == {"error": "CORS Error", "message": "Not allowed by CORS"}


def test_preflight(client):
    resp = client.options(
        "/api/users",
        headers={"Origin": ALLOWED, "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == ALLOWED
    methods = resp.headers["access-control-allow-methods"].split(",")
    assert methods == ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
    allowed_headers = resp.headers["access-control-allow-headers"].split(",")
    for header in ["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin", "Cache-Control"]:
        assert header in allowed_headers


def test_preflight_from_foreign_origin(client):
    resp = client.options(
        "/api/users",
        headers={"Origin": FOREIGN, "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 403
    assert resp.json()["message"] == "Not allowed by CORS"


def test_custom_allow_list(database):
    settings = Settings(allowed_origins="https://a.example.com, https://b.example.com", database_url=database.url)
    client = TestClient(create_application(settings=settings, database=database))

    assert client.get("/api", headers={"Origin": "https://b.example.com"}).status_code == 200
    assert client.get("/api", headers={"Origin": ALLOWED}).status_code == 403
    assert client.get("/api").json()["allowedOrigins"] == ["https://a.example.com", "https://b.example.com"]


def test_unmatched_api_route(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": "API route not found", "path": "/api/does-not-exist"}


def test_unmatched_nested_api_route_any_method(client):
    resp = client.post("/api/users/1/avatar", json={})
    assert resp.status_code == 404
    assert resp.json() == {"error": "API route not found", "path": "/api/users/1/avatar"}


def test_oversized_body_is_rejected(client):
    body = b'{"name": "' + b"x" * (10 * 1024 * 1024) + b'"}'
    resp = client.post("/api/users", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "message": "request entity too large"}
    assert client.get("/api/users").json() == []


def test_body_at_limit_is_parsed(database):
    settings = Settings(max_body_size=200, database_url=database.url)
    client = TestClient(create_application(settings=settings, database=database))

    ok = client.post("/api/branches", json={"name": "Bandung"})
    assert ok.status_code == 201

    too_big = client.post("/api/branches", json={"name": "B" * 300})
    assert too_big.status_code == 500


def test_malformed_json_goes_to_error_handler(client):
    resp = client.post(
        "/api/users",
        content=b'{"name": ',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 500
    assert resp.json()["error"] == "Internal server error"
    assert resp.json()["message"].startswith("Malformed JSON body")


def test_unhandled_error_detail_in_development(app, client):
    @app.get("/explode")
    def explode():
        raise RuntimeError("boom")

    resp = client.get("/explode")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "message": "boom"}


def test_unhandled_error_detail_hidden_outside_development(database):
    settings = Settings(environment="production", database_url=database.url)
    app = create_application(settings=settings, database=database)

    @app.get("/explode")
    def explode():
        raise RuntimeError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/explode")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "message": "Something went wrong"}


def test_requests_are_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="winajaya.requests")

    client.get("/api", headers={"Origin": ALLOWED})
    client.get("/api/users")

    messages = [r.getMessage() for r in caplog.records if r.name == "winajaya.requests"]
    assert any(m.endswith("GET /api") for m in messages)
    assert f"Origin: {ALLOWED}" in messages
    assert "Origin: none" in messages


def test_server_errors_keep_cors_headers(client):
    resp = client.post(
        "/api/users",
        content=b'{"name": ',
        headers={"Content-Type": "application/json", "Origin": ALLOWED},
    )
    assert resp.status_code == 500
    assert resp.headers["access-control-allow-origin"] == ALLOWED
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_database_errors_keep_cors_headers(tmp_path):
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'missing' / 'app.db'}")
    client = TestClient(create_application(settings=settings), raise_server_exceptions=False)

    resp = client.get("/api/users", headers={"Origin": ALLOWED})
    assert resp.status_code == 500
    assert resp.json()["error"] == "Internal server error"
    assert resp.headers["access-control-allow-origin"] == ALLOWED


def test_oversized_body_keeps_cors_headers(database):
    settings = Settings(max_body_size=200, database_url=database.url)
    client = TestClient(create_application(settings=settings, database=database))

    resp = client.post("/api/branches", json={"name": "B" * 300}, headers={"Origin": ALLOWED})
    assert resp.status_code == 500
    assert resp.headers["access-control-allow-origin"] == ALLOWED


def test_chunked_body_over_limit_is_rejected(database):
    settings = Settings(max_body_size=200, database_url=database.url)
    client = TestClient(create_application(settings=settings, database=database))

    def chunks():
        for _ in range(10):
            yield b"x" * 100

    resp = client.post(
        "/api/branches",
        content=chunks(),
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "message": "request entity too large"}
    assert client.get("/api/branches").json() == []


def test_chunked_body_under_limit_is_parsed(database):
    settings = Settings(max_body_size=200, database_url=database.url)
    client = TestClient(create_application(settings=settings, database=database))

    def chunks():
        yield b'{"name": '
        yield b'"Bogor"}'

    resp = client.post(
        "/api/branches",
        content=chunks(),
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 201
    assert resp.json()["name"] == "Bogor"


def test_run_serves_exported_app(monkeypatch):
    import uvicorn

    from winajaya import main

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(main.app.state, "settings", Settings(port=4567, log_level="WARNING"))

    main.run()

    assert len(calls) == 1
    served, kwargs = calls[0]
    assert served is main.app
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 4567
    assert kwargs["log_level"] == "warning"
