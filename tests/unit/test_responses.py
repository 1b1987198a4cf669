"""
Unit tests for the JSON response helpers.

Tests cover:
- JSON body, status and content type
- Serialization failures falling back to a plain-text 500
- The error envelope shape
"""

import json
from datetime import datetime
from uuid import UUID

from fastapi.responses import JSONResponse
from structlog.testing import capture_logs

from api.src.models.user import User
from api.src.responses import respond_with_error, respond_with_json


class TestRespondWithJSON:
    """Tests for respond_with_json."""

    def test_serializes_payload(self):
        response = respond_with_json(201, {"status": "ok"})

        assert response.status_code == 201
        assert response.media_type == "application/json"
        assert json.loads(response.body) == {"status": "ok"}

    def test_renders_non_ascii_unescaped(self):
        response = respond_with_json(200, {"name": "Zoë"})

        assert isinstance(response, JSONResponse)
        assert response.body == '{"name":"Zoë"}'.encode("utf-8")

    def test_serializes_pydantic_model(self):
        user = User(
            id=UUID("6f1c1f9e-7d2a-4a53-9a57-0c5f0e1f2b3c"),
            created_at=datetime(2024, 5, 1, 12, 30),
            updated_at=datetime(2024, 5, 1, 12, 30),
            name="Alice",
        )

        response = respond_with_json(200, user)

        assert json.loads(response.body) == {
            "id": "6f1c1f9e-7d2a-4a53-9a57-0c5f0e1f2b3c",
            "created_at": "2024-05-01T12:30:00",
            "updated_at": "2024-05-01T12:30:00",
            "name": "Alice",
        }

    def test_unserializable_payload_becomes_plain_text_500(self):
        response = respond_with_json(200, {"feed": object()})

        assert response.status_code == 500
        assert response.media_type == "text/plain"
        assert b"not JSON serializable" in response.body

    def test_non_finite_float_becomes_plain_text_500(self):
        response = respond_with_json(200, {"score": float("nan")})

        assert response.status_code == 500
        assert response.media_type == "text/plain"


class TestRespondWithError:
    """Tests for respond_with_error."""

    def test_wraps_message_in_envelope(self):
        response = respond_with_error(404, "feed not found")

        assert response.status_code == 404
        assert json.loads(response.body) == {"error": "feed not found"}

    def test_server_errors_are_logged(self):
        with capture_logs() as logs:
            response = respond_with_error(503, "database unavailable")

        assert response.status_code == 503
        assert {
            "event": "responding_with_5xx_error",
            "log_level": "error",
            "status_code": 503,
            "message": "database unavailable",
        } in logs

    def test_client_errors_are_not_logged(self):
        with capture_logs() as logs:
            respond_with_error(400, "bad request")

        assert logs == []
