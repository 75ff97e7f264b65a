"""Unit tests for response module - NO MOCKS."""

import json

import pytest
from shared.response import (
    success_response,
    error_response,
    options_response,
    ok,
    method_not_allowed,
    internal_error,
)


class TestSuccessResponse:
    """Test success_response function."""

    def test_basic_success(self):
        """Should wrap data in success envelope."""
        data = {"active": 3, "inactive": 2}
        response = success_response(data)

        assert response["statusCode"] == 200
        assert response["headers"]["Content-Type"] == "application/json"
        assert response["headers"]["Access-Control-Allow-Origin"] == "*"

        body = json.loads(response["body"])
        assert body == {"success": True, "data": data}

    def test_success_with_custom_status(self):
        """Should accept custom status code."""
        response = success_response({"created": True}, status_code=201)
        assert response["statusCode"] == 201

    def test_success_with_additional_headers(self):
        """Should merge additional headers."""
        response = success_response(
            {"data": "test"},
            additional_headers={"Cache-Control": "no-store"}
        )

        assert response["headers"]["Cache-Control"] == "no-store"
        assert response["headers"]["Content-Type"] == "application/json"

    def test_empty_data(self):
        """Should handle empty data dict."""
        body = json.loads(success_response({})["body"])
        assert body == {"success": True, "data": {}}


class TestErrorResponse:
    """Test error_response function."""

    def test_basic_error(self):
        """Should return failure envelope with message."""
        response = error_response("Something went wrong")

        assert response["statusCode"] == 400  # Default
        body = json.loads(response["body"])
        assert body == {"success": False, "error": "Something went wrong"}

    def test_error_with_custom_status(self):
        response = error_response("Database not configured", status_code=500)
        assert response["statusCode"] == 500

    def test_unicode_in_error(self):
        """Should handle Unicode in error messages."""
        body = json.loads(error_response("Erreur: échec 🚫")["body"])
        assert body["error"] == "Erreur: échec 🚫"


class TestOptionsResponse:
    """Test CORS preflight response."""

    def test_empty_body(self):
        response = options_response()

        assert response["statusCode"] == 200
        assert response["body"] == ""
        assert "Content-Type" not in response["headers"]

    def test_headers_are_a_copy(self):
        """Mutating one response must not leak into the next."""
        options_response()["headers"]["X-Test"] = "1"
        assert "X-Test" not in options_response()["headers"]


class TestConvenienceFunctions:
    """Test convenience helper functions."""

    def test_ok(self):
        response = ok({"total": 5})

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["data"]["total"] == 5

    def test_method_not_allowed(self):
        response = method_not_allowed("POST")

        assert response["statusCode"] == 405
        assert response["headers"]["Allow"] == "GET"
        body = json.loads(response["body"])
        assert body == {"success": False, "error": "Method POST not allowed"}

    def test_method_not_allowed_multiple(self):
        response = method_not_allowed("DELETE", allowed=("GET", "POST"))
        assert response["headers"]["Allow"] == "GET, POST"

    def test_internal_error_default_message(self):
        response = internal_error()

        assert response["statusCode"] == 500
        body = json.loads(response["body"])
        assert body["error"] == "Internal server error"


class TestCORSHeaders:
    """Test CORS headers are always present."""

    @pytest.mark.parametrize("response", [
        ok({"test": 1}),
        error_response("test"),
        options_response(),
        method_not_allowed("PUT"),
        internal_error(),
    ])
    def test_all_helpers_have_cors(self, response):
        headers = response["headers"]
        assert headers["Access-Control-Allow-Origin"] == "*"
        assert headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
        assert headers["Access-Control-Allow-Headers"] == "Content-Type, Authorization"
