"""
Error Kinds

Every failure a handler can produce maps to one of the exceptions below.
Form handlers recover ``ValidationError`` and ``AuthenticationFailure``
locally; everything else reaches the single responder installed by
``register_error_handlers``.
"""

import logging

from flask import render_template
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from todoapp.extensions import db

logger = logging.getLogger(__name__)


class TodoAppError(Exception):
    """Base class for application errors with an HTTP status."""
    status_code = 500
    message = 'Something went wrong.'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(TodoAppError):
    """Malformed or empty input."""
    status_code = 400
    message = 'Invalid request.'

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__(self.messages[0] if self.messages else None)


class DuplicateUsername(ValidationError):
    def __init__(self, username):
        self.username = username
        super().__init__('Username already taken. Please choose another.')


class AuthenticationFailure(TodoAppError):
    """Bad credentials.

    ``reason`` records which check failed and is for server logs only;
    ``message`` is the same for every failure so responses do not reveal
    whether a username exists.
    """
    status_code = 401
    message = 'Invalid username or password.'

    def __init__(self, reason):
        self.reason = reason
        super().__init__()


class Unauthorized(TodoAppError):
    status_code = 401
    message = 'Unauthorized'


class Forbidden(TodoAppError):
    status_code = 403
    message = 'Forbidden'


class NotFound(TodoAppError):
    status_code = 404
    message = 'Not Found'


class TodoNotFound(NotFound):
    def __init__(self, payload_id):
        self.payload_id = payload_id
        super().__init__('Todo not found.')


class StoreFailure(TodoAppError):
    """A persistence round-trip failed. Detail stays in the server log."""
    status_code = 500
    message = 'Internal Server Error'


def _render_error(status_code, message):
    return render_template('error.html', title='Error', status_code=status_code, message=message), status_code


def register_error_handlers(app):
    """Install the centralized error responder on ``app``."""

    @app.errorhandler(TodoAppError)
    def handle_app_error(error):
        if error.status_code >= 500:
            logger.error('Request failed: %r', error, exc_info=error)
            return _render_error(error.status_code, TodoAppError.message)
        return _render_error(error.status_code, error.message)

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        logger.error('Unhandled store failure', exc_info=error)
        return _render_error(StoreFailure.status_code, StoreFailure.message)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return _render_error(error.code, error.name)
