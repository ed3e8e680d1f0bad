"""
API Errors
==========

Typed errors raised by route handlers and the app-wide handlers that turn
them (and storage failures) into the uniform JSON body:

    {"error": "...", "code": "...", "details": ..., "suggestion": ...}
"""

import logging
import re

from flask import jsonify
from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm.exc import NoResultFound
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    default_code = 'INTERNAL_ERROR'

    def __init__(self, message, code=None, status_code=None, details=None, suggestion=None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.suggestion = suggestion

    def to_dict(self):
        return build_error_body(self.message, self.code, self.details, self.suggestion)


class ValidationError(ApiError):
    status_code = 400
    default_code = 'VALIDATION_ERROR'


class AuthenticationError(ApiError):
    status_code = 401
    default_code = 'AUTH_REQUIRED'


class ForbiddenError(ApiError):
    status_code = 403
    default_code = 'FORBIDDEN'


class NotFoundError(ApiError):
    status_code = 404
    default_code = 'NOT_FOUND'


class ConflictError(ApiError):
    status_code = 409
    default_code = 'CONFLICT'


class ServiceUnavailableError(ApiError):
    status_code = 503
    default_code = 'SERVICE_UNAVAILABLE'


def build_error_body(message, code, details=None, suggestion=None):
    body = {'error': message, 'code': code}
    if details is not None:
        body['details'] = details
    if suggestion is not None:
        body['suggestion'] = suggestion
    return body


def error_response(message, code, status_code, details=None, suggestion=None):
    """Return a (response, status) pair with the uniform error body"""
    return jsonify(build_error_body(message, code, details, suggestion)), status_code


def _http_code(e):
    # "Method Not Allowed" -> METHOD_NOT_ALLOWED
    return re.sub(r'[^A-Za-z0-9]+', '_', e.name or 'error').strip('_').upper()


def _rollback():
    from .database import db
    try:
        db.session.rollback()
    except Exception as e:
        logger.debug("Session rollback failed: %s", e)


def register_error_handlers(app):
    """Install the JSON error handlers on the app"""
    from .logging_service import LoggingService

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        _rollback()
        if e.status_code >= 500:
            LoggingService.error('api', e.message, {'code': e.code, 'details': e.details})
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return error_response(e.description or e.name, _http_code(e), e.code)

    @app.errorhandler(NoResultFound)
    def handle_no_result(e):
        _rollback()
        return error_response('Resource not found', 'NOT_FOUND', 404)

    def handle_unavailable(e):
        _rollback()
        LoggingService.log_error_with_traceback('database', e)
        return error_response(
            'Database is temporarily unavailable',
            'DATABASE_UNAVAILABLE',
            503,
            suggestion='Please try again in a moment'
        )

    for exc in (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError):
        app.register_error_handler(exc, handle_unavailable)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e):
        _rollback()
        LoggingService.log_error_with_traceback('database', e)
        return error_response('Internal server error', 'INTERNAL_ERROR', 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        _rollback()
        LoggingService.log_error_with_traceback('api', e)
        return error_response('Internal server error', 'INTERNAL_ERROR', 500)
