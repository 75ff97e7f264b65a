"""Standardized Lambda response helpers."""

import json
from typing import Any, Iterable, Optional


# CORS headers for every response, including preflight
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

STANDARD_HEADERS = {
    "Content-Type": "application/json",
    **CORS_HEADERS,
}


def _json_response(
    payload: dict,
    status_code: int,
    additional_headers: Optional[dict],
) -> dict[str, Any]:
    headers = STANDARD_HEADERS.copy()
    if additional_headers:
        headers.update(additional_headers)

    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(payload),
    }


def success_response(
    data: dict,
    status_code: int = 200,
    additional_headers: Optional[dict] = None,
) -> dict[str, Any]:
    """
    Build successful API response.

    Args:
        data: Response data to return
        status_code: HTTP status code (default: 200)
        additional_headers: Optional additional headers to include

    Returns:
        Lambda response dict with statusCode, headers, and body

    Example:
        >>> success_response({"active": 3})
        {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json", ...},
            "body": '{"success": true, "data": {"active": 3}}'
        }
    """
    return _json_response({"success": True, "data": data}, status_code, additional_headers)


def error_response(
    message: str,
    status_code: int = 400,
    additional_headers: Optional[dict] = None,
) -> dict[str, Any]:
    """
    Build error API response.

    Args:
        message: Error message to return to client
        status_code: HTTP status code (default: 400)
        additional_headers: Optional additional headers to include

    Returns:
        Lambda response dict with statusCode, headers, and error body

    Example:
        >>> error_response("Database not configured", 500)
        {
            "statusCode": 500,
            "headers": {"Content-Type": "application/json", ...},
            "body": '{"success": false, "error": "Database not configured"}'
        }
    """
    return _json_response({"success": False, "error": message}, status_code, additional_headers)


def options_response() -> dict[str, Any]:
    """Return empty 200 response for CORS preflight."""
    return {
        "statusCode": 200,
        "headers": CORS_HEADERS.copy(),
        "body": "",
    }


# Convenience functions for common HTTP status codes

def ok(data: dict, additional_headers: Optional[dict] = None) -> dict[str, Any]:
    """Return 200 OK response with data."""
    return success_response(data, 200, additional_headers)


def method_not_allowed(method: str, allowed: Iterable[str] = ("GET",)) -> dict[str, Any]:
    """Return 405 Method Not Allowed with Allow header."""
    return error_response(
        f"Method {method} not allowed",
        405,
        {"Allow": ", ".join(allowed)},
    )


def internal_error(
    message: str = "Internal server error",
    additional_headers: Optional[dict] = None,
) -> dict[str, Any]:
    """Return 500 Internal Server Error."""
    return error_response(message, 500, additional_headers)
