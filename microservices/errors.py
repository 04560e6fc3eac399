"""
Error taxonomy and the JSON envelope shared by both services.

Every response body is either ``{"success": true, "data": ...}`` or
``{"success": false, "error": "..."}``. Handlers raise ``ServiceError``
subclasses and the registered error handlers turn them into envelopes, so no
exception leaves a request unformatted.
"""

import logging

from flask import has_request_context, jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised at start-up when an environment value cannot be used."""


class ServiceError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    status_code = 400
    message = "Invalid request"


class UserNotFoundError(ServiceError):
    status_code = 404
    message = "User not found"


class OrderNotFoundError(ServiceError):
    status_code = 404
    message = "Order not found"


class DependencyUnavailableError(ServiceError):
    """The user directory could not be reached or answered with a server error."""

    status_code = 503
    message = "User service unavailable"


def success(data, status_code: int = 200):
    return jsonify({"success": True, "data": data}), status_code


def failure(message: str, status_code: int):
    return jsonify({"success": False, "error": message}), status_code


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        if e.status_code >= 500:
            logger.error(f"{request_label()} failed: {e.message}")
        return failure(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return failure(e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception(f"Unexpected error handling {request_label()}")
        return failure("Internal server error", 500)


def request_label() -> str:
    if has_request_context():
        return f"{request.method} {request.path}"
    return "request"
