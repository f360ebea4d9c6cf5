"""
Generic error layer.

Routes raise the lookup exceptions below instead of building the
response themselves; everything reaching this layer is turned into a
JSON ``{"error": ...}`` body.
"""
from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException, NotFound

from common.extensions import db


class MalformedIdError(ValueError):
    """The path id is not a valid blog id."""


class BlogNotFoundError(LookupError):
    """No blog has the requested id."""


def _malformed_id(e: MalformedIdError):
    current_app.logger.warning(f"Malformed id: {e}")
    return jsonify({"error": "malformatted id"}), 400


def _not_found(e: BlogNotFoundError):
    current_app.logger.warning(f"Not found: {e}")
    return jsonify({"error": "blog not found"}), 404


def _unknown_endpoint(_e: NotFound):
    return jsonify({"error": "unknown endpoint"}), 404


def _http_error(e: HTTPException):
    return jsonify({"error": e.description}), e.code


def _internal_error(e: Exception):
    current_app.logger.error(f"Internal error: {e}", exc_info=True)
    db.session.rollback()
    return jsonify({"error": "internal server error"}), 500


def init_app(app):
    """Register every error handler on the given app."""
    app.register_error_handler(MalformedIdError, _malformed_id)
    app.register_error_handler(BlogNotFoundError, _not_found)
    app.register_error_handler(NotFound, _unknown_endpoint)
    app.register_error_handler(HTTPException, _http_error)
    app.register_error_handler(Exception, _internal_error)
