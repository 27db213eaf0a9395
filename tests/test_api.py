"""API surface tests: health, CORS and error envelopes."""

from datetime import datetime

from sqlalchemy.exc import OperationalError

from src import main
from src.services.cat_service import CatService


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))


def test_health_check_no_auth_required(client):
    """Health is reachable without credentials."""
    response = client.get("/health", headers={})
    assert response.status_code == 200


def test_cors_preflight(client):
    """Preflight requests are answered with 200 and the origin is reflected."""
    response = client.options(
        "/cats",
        headers={
            "Origin": "https://cats.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://cats.example.com"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_options_without_origin(client):
    """Bare OPTIONS requests are answered with 200 on any path."""
    assert client.options("/cats").status_code == 200
    assert client.options("/adoptions/1").status_code == 200


def test_cors_headers_on_simple_request(client):
    """Regular responses carry the allow-origin header."""
    response = client.get("/cats", headers={"Origin": "https://cats.example.com"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://cats.example.com"


def test_unknown_route_uses_error_envelope(client):
    """Routing errors are wrapped in the error body."""
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert "error" in response.json()


def test_invalid_path_parameter_is_bad_request(client):
    """Non-integer ids are rejected with 400."""
    response = client.get("/cats/not-a-number")
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request parameters"


def test_invalid_json_body(client, auth_headers):
    """Malformed JSON is a validation error."""
    response = client.post(
        "/cats",
        headers={**auth_headers, "Content-Type": "application/json"},
        content="{not json",
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid JSON body"


def test_database_error_maps_to_500(client, monkeypatch):
    """Storage failures become 500 with the underlying message attached."""

    def broken(self):
        raise OperationalError("SELECT * FROM cats", {}, Exception("connection refused"))

    monkeypatch.setattr(CatService, "list_all", broken)

    response = client.get("/cats")
    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Database error"
    assert "connection refused" in data["details"]


def test_database_error_details_hidden(client, monkeypatch):
    """With EXPOSE_ERROR_DETAILS off only the generic message is returned."""

    def broken(self):
        raise OperationalError("SELECT * FROM cats", {}, Exception("connection refused"))

    monkeypatch.setattr(CatService, "list_all", broken)
    monkeypatch.setattr(
        main, "settings", main.settings.model_copy(update={"expose_error_details": False})
    )

    response = client.get("/cats")
    assert response.status_code == 500
    assert response.json() == {"error": "Database error"}
