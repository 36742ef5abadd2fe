from functools import wraps

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from farmconnect.extensions import db


class APIError(HTTPException):
    """Base for errors that are rendered as the JSON error envelope."""

    code = 500

    def __init__(self, message, error=None):
        super().__init__(description=message)
        self.error = error


class ValidationError(APIError):
    code = 400


class Unauthorized(APIError):
    code = 401


class Forbidden(APIError):
    code = 403


class NotFound(APIError):
    code = 404


class Conflict(APIError):
    code = 409


class ServerError(APIError):
    code = 500


def error_response(message, status, error=None):
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return jsonify(body), status


def handles_errors(message):
    """Turn unexpected failures inside a view into a ServerError.

    HTTP errors raised on purpose pass through untouched; anything else rolls
    back the session, is logged with its traceback and surfaces as a 500
    carrying ``message``.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                db.session.rollback()
                current_app.logger.exception("%s: %s", message, e)
                raise ServerError(message, error=str(e)) from e

        return wrapper

    return decorator


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def http_error(e):
        error = getattr(e, "error", None)
        if e.code >= 500 and not app.config.get("EXPOSE_ERROR_DETAILS"):
            error = None
        return error_response(e.description, e.code, error)

    # Generic error handler for 500 Internal Server Error
    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.exception("An internal server error occurred: %s", e)
        error = str(e) if app.config.get("EXPOSE_ERROR_DETAILS") else None
        return error_response("Internal Server Error", 500, error)
