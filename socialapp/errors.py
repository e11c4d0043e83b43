import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from socialapp.db import db
from socialapp.extensions.extensions import jwt


logger = logging.getLogger(__name__)


class SocialAppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(SocialAppError):
    status_code = 400


class ConflictError(SocialAppError):
    status_code = 400


class NotFoundError(SocialAppError):
    status_code = 404


class AuthError(SocialAppError):
    status_code = 401


def _error_response(message, status_code):
    return jsonify({"error": message}), status_code


def register_error_handlers(app):
    @app.errorhandler(SocialAppError)
    def handle_app_error(e):
        if e.status_code >= 500:
            logger.error("request failed: %s", e.message)
        return _error_response(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return _error_response(e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("unhandled error")
        db.session.rollback()
        return _error_response("Internal server error", 500)


@jwt.unauthorized_loader
def _missing_token(reason):
    return _error_response("missing token", 401)


@jwt.invalid_token_loader
def _invalid_token(reason):
    return _error_response("invalid token", 401)


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return _error_response("token expired", 401)


@jwt.user_lookup_error_loader
def _user_missing(jwt_header, jwt_payload):
    return _error_response("user not found", 401)
