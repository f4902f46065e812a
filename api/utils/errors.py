# api/utils/errors.py
"""
Standardized API error responses.

All errors share one JSON shape: {"error": "error_code", "detail": "optional message"}.
Error codes are snake_case so clients can branch on them.
"""

from flask import jsonify
from typing import Optional


def error_response(
    code: str,
    status: int = 400,
    detail: Optional[str] = None,
    **extra
):
    """
    Create a standardized error response.

    Args:
        code: Machine-readable error code (snake_case)
        status: HTTP status code
        detail: Human-readable explanation (optional)
        **extra: Additional fields to include in response

    Returns:
        Tuple of (jsonify response, status code)
    """
    payload = {"error": code}
    if detail:
        payload["detail"] = detail
    payload.update(extra)
    return jsonify(payload), status


# Not Found (404)
def not_found(resource: str = "resource", detail: str = None):
    """Requested book, chapter, verse or translation does not exist."""
    return error_response("not_found", 404, detail or f"{resource} not found")


# Validation (400)
def validation_error(code: str, detail: str = None):
    """Request was well-formed but its values are unusable."""
    return error_response(code, 400, detail)


def missing_field(field: str):
    """Required query parameter or body field is missing."""
    return error_response(f"{field}_required", 400, f"Missing required field: {field}")


def invalid_field(field: str, detail: str = None):
    """Field value is invalid."""
    return error_response(f"invalid_{field}", 400, detail)


# Server Error (500)
def server_error(code: str = "internal_error", detail: str = None):
    """Internal server error."""
    return error_response(code, 500, detail)
