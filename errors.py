"""
Error taxonomy for the API and the single place it is turned into HTTP.

Services raise these; the handlers registered by ``register_error_handlers``
wrap every failure in the ``{"success": false, "error": ...}`` envelope.
"""
import logging

from flask import jsonify
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from models import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for failures surfaced to the caller."""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Malformed or missing input."""
    status_code = 400


class Unauthenticated(ApiError):
    """Missing or invalid credential."""
    status_code = 401


class Forbidden(ApiError):
    """Authenticated but not permitted for this resource."""
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    """Duplicate unique key or a state change that is no longer allowed."""
    status_code = 400


class Expired(ApiError):
    status_code = 400


class UpstreamError(ApiError):
    """An outbound integration failed."""
    status_code = 502


def _error_response(message, status_code):
    return jsonify({'success': False, 'error': message}), status_code


def describe_schema_error(err):
    """Flatten the first pydantic error into a readable message."""
    first = err.errors()[0]
    location = '.'.join(str(part) for part in first.get('loc', ()))
    if location:
        return f"{location}: {first['msg']}"
    return first['msg']


def register_error_handlers(app):
    """Map exceptions onto the JSON error envelope."""

    @app.errorhandler(ApiError)
    def handle_api_error(err):
        if err.status_code >= 500:
            logger.error(f"[API] {type(err).__name__}: {err.message}")
        return _error_response(err.message, err.status_code)

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(err):
        return _error_response(describe_schema_error(err), ValidationError.status_code)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err):
        db.session.rollback()
        logger.warning(f"[API] Integrity error: {err.orig}")
        return _error_response('Duplicate value violates a unique constraint', Conflict.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return _error_response(err.description, err.code)

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        db.session.rollback()
        logger.exception(f"[API] Unhandled error: {err}")
        return _error_response('Server error', 500)
