"""
Application error taxonomy.

Core operations raise these exceptions; the handlers registered by
``register_error_handlers`` translate them into the JSON envelope
``{"success": false, "message": ...}`` with the matching HTTP status.
"""
from flask import jsonify, request, current_app
from werkzeug.exceptions import HTTPException


class QuizAppError(Exception):
    """Base class for errors that are reported to the client."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self):
        return jsonify({'success': False, 'message': self.message}), self.status_code


class ValidationError(QuizAppError):
    """Malformed or out-of-range input."""
    status_code = 400
    default_message = "Invalid input"


class Unauthenticated(QuizAppError):
    status_code = 401
    default_message = "Not authorized to access this route"


class Forbidden(QuizAppError):
    """Authenticated, but lacking ownership or role."""
    status_code = 403
    default_message = "Not authorized to perform this action"


class NotFound(QuizAppError):
    status_code = 404
    default_message = "Resource not found"


class InvalidState(QuizAppError):
    """The operation is illegal in the current lifecycle state."""
    status_code = 400
    default_message = "Operation not allowed in the current state"


class Conflict(InvalidState):
    """A uniqueness rule was violated, e.g. a second submission."""
    default_message = "Resource already exists"


def register_error_handlers(app):
    """Attach JSON error handlers to the app."""

    @app.errorhandler(QuizAppError)
    def handle_app_error(e):
        if e.status_code >= 500:
            current_app.logger.error(f"{e.message} - {request.method} {request.path}")
        else:
            current_app.logger.info(
                f"{type(e).__name__}: {e.message} - {request.method} {request.path}"
            )
        return e.to_response()

    @app.errorhandler(404)
    def handle_404(e):
        current_app.logger.warning(f"404 error: {request.method} {request.path}")
        return jsonify({
            'success': False,
            'message': f'Route not found: {request.method} {request.path}'
        }), 404

    @app.errorhandler(405)
    def handle_405(e):
        current_app.logger.warning(f"405 error: {request.method} {request.path}")
        return jsonify({
            'success': False,
            'message': f'Method not allowed: {request.method} {request.path}'
        }), 405

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        # Let werkzeug's own HTTP errors keep their status (400 bad JSON, 415, ...)
        if isinstance(e, HTTPException):
            return jsonify({'success': False, 'message': e.description}), e.code

        current_app.logger.exception(f"Unhandled error on {request.method} {request.path}")
        body = {'success': False, 'message': 'Server Error'}
        if current_app.config.get('ENV_NAME') != 'production':
            body['error'] = str(e)
        return jsonify(body), 500
