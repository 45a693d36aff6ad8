"""
Error taxonomy and JSON error handlers.

Domain code raises one of the MarketplaceError subclasses; the handlers
registered by the app factory turn them into ``{"error": message}`` responses.
"""
import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from marketplace.extensions import db

logger = logging.getLogger(__name__)


class MarketplaceError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self):
        return jsonify({'error': self.message}), self.status_code


class ValidationError(MarketplaceError):
    """Malformed or missing request fields"""
    status_code = 400
    default_message = 'Invalid request'


class Forbidden(MarketplaceError):
    """Authenticated but not entitled to the resource"""
    status_code = 403
    default_message = 'Forbidden'


class NotFound(MarketplaceError):
    """Referenced entity does not exist"""
    status_code = 404
    default_message = 'Not found'


class Unexpected(MarketplaceError):
    """Store or processor failure; details stay in the logs"""
    status_code = 500
    default_message = 'Internal server error'


class Unconfigured(MarketplaceError):
    """A dependent external service is not configured"""
    status_code = 503
    default_message = 'Service unavailable'


def register_error_handlers(app):
    """Attach JSON error handlers to the Flask app"""

    @app.errorhandler(MarketplaceError)
    def handle_marketplace_error(error):
        if error.status_code >= 500:
            logger.error('%s: %s', type(error).__name__, error.message)
        return error.to_response()

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception('Database error while handling request')
        return jsonify({'error': Unexpected.default_message}), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({'error': error.description or error.name})
        response.status_code = error.code
        for header, value in error.get_headers():
            if header.lower() != 'content-type':
                response.headers[header] = value
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception('Unhandled error while handling request')
        return jsonify({'error': Unexpected.default_message}), 500
