# File: tests/test_health.py

"""
Basic smoke tests for the app wiring.

These use FastAPI's TestClient. To run:
    pytest -q
"""

from conftest import API
from planner.core.errors import format_validation_errors


def test_health_endpoint(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_unknown_route_uses_error_envelope(client):
    resp = client.get(f"{API}/nope")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Not Found"}


def test_malformed_json_body_message(client, owner):
    _, headers = owner
    resp = client.post(
        f"{API}/projects",
        content=b'{"name": ',
        headers={**headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Malformed JSON body"}


def test_malformed_json_is_rejected_before_auth(client):
    resp = client.post(
        f"{API}/projects",
        content=b"{oops",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Malformed JSON body"


def test_format_validation_errors_drops_json_offset():
    errors = [{"type": "json_invalid", "loc": ("body", 9), "msg": "JSON decode error"}]
    assert format_validation_errors(errors) == "Malformed JSON body"
