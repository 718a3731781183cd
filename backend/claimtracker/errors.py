"""API error taxonomy and the app-level handlers that render it.

Every failure leaves the API as ``{"error": "<message>"}`` with a status code.
Route code raises one of the ``ApiError`` subclasses; marshmallow validation
errors, werkzeug HTTP errors and anything uncaught are translated here.
"""
from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(ApiError):
    status_code = 400
    message = "Bad request"


class Unauthorized(ApiError):
    status_code = 401
    message = "Access token required"


class Forbidden(ApiError):
    status_code = 403
    message = "Invalid token"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class Conflict(ApiError):
    status_code = 409
    message = "Conflict"


class UpstreamError(ApiError):
    status_code = 502
    message = "Language model request failed"


class InternalError(ApiError):
    status_code = 500
    message = "Internal server error"


def _json_error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _first_message(messages: Any) -> str:
    """Pick a readable message out of marshmallow's nested error structure."""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, list) and messages:
        return _first_message(messages[0])
    if isinstance(messages, dict) and messages:
        key, value = next(iter(messages.items()))
        inner = _first_message(value)
        if isinstance(value, (list, str)) and key != "_schema":
            return f"{key}: {inner}"
        return inner
    return "Invalid request"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def _api_error(e: ApiError):
        if e.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, e.message)
        return _json_error(e.message, e.status_code)

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return _json_error(_first_message(e.messages), 400)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        if e.code == 404 and request.path.startswith("/api"):
            return _json_error("API endpoint not found", 404)
        return _json_error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        from .extensions import db  # local import to avoid circulars

        logger.exception("Unhandled error on %s %s", request.method, request.path)
        db.session.rollback()
        return _json_error("Internal server error", 500)
