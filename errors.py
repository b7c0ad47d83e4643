import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from models import db

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Error en el servidor"


class ConfigurationError(RuntimeError):
    """The process is missing settings it cannot run without."""


class ApiError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400


class AuthenticationError(ApiError):
    status_code = 401


class ConflictError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class ServerError(ApiError):
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(exc):
        logger.critical("Configuration error: %s", exc)
        return jsonify({"error": SERVER_ERROR_MESSAGE}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        db.session.rollback()
        logger.exception("Unhandled error while serving request")
        return jsonify({"error": SERVER_ERROR_MESSAGE}), 500
