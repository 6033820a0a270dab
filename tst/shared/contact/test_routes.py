"""HTTP tests for the contact form route."""

import pytest
from fastapi.testclient import TestClient

from src.app import app
from src.shared.contact.routes import get_contact_handler


@pytest.fixture
def client(handler):
    app.dependency_overrides[get_contact_handler] = lambda: handler
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_submission_is_accepted(client, valid_form, dispatcher, recipients):
    response = client.post("/api/contactForm", json=valid_form, headers={"X-Forwarded-For": "203.0.113.9"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Form submitted successfully"}
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["content-type"] == "application/json"
    assert len(dispatcher.sent) == 1
    assert dispatcher.sent[0].recipients == recipients


def test_link_spam_is_rejected(client, valid_form, dispatcher):
    valid_form["description"] = "Check out http://example.com"

    response = client.post("/api/contactForm", json=valid_form)

    assert response.status_code == 400
    assert response.json()["error"] == "spam_detected"
    assert response.headers["access-control-allow-origin"] == "*"
    assert dispatcher.sent == []


def test_preflight(client):
    response = client.options("/api/contactForm")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_get_is_not_allowed(client):
    response = client.get("/api/contactForm")

    assert response.status_code == 405
    assert response.json()["error"] == "method_not_allowed"


def test_invalid_json(client):
    response = client.post(
        "/api/contactForm",
        content=b"{firstName: John",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "request_malformed"


def test_rate_limited_status(client, valid_form):
    headers = {"X-Forwarded-For": "203.0.113.50, 10.0.0.1"}
    for _ in range(3):
        client.post("/api/contactForm", json=valid_form, headers=headers)

    response = client.post("/api/contactForm", json=valid_form, headers=headers)

    assert response.status_code == 429
    assert response.json()["error"] == "rate_limited"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_head_is_answered_by_the_pipeline(client):
    response = client.head("/api/contactForm")

    assert response.status_code == 405
    assert response.headers["access-control-allow-origin"] == "*"
