from functools import wraps
from flask import current_app, request
from flask_login import current_user

from quizhub.common.errors import Forbidden, Unauthenticated, ValidationError
from quizhub.security import SecurityLogger


def api_login_required(f):
    """Decorator to require login for an API route."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            raise Unauthenticated()
        return f(*args, **kwargs)
    return decorated_function


def roles_required(*roles):
    """Decorator to require one of the given roles for an API route."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                raise Unauthenticated()
            if current_user.role not in roles:
                SecurityLogger.log_forbidden(current_user.id, request.path, f"role {current_user.role}")
                raise Forbidden(f"User role {current_user.role} is not authorized to access this route")
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def teacher_required(f):
    """Decorator to require teacher role for a route."""
    return roles_required('teacher')(f)


def student_required(f):
    """Decorator to require student role for a route."""
    return roles_required('student')(f)


def json_body() -> dict:
    """Return the request's JSON object, or an empty dict."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        current_app.logger.warning(f"Non-object JSON body on {request.path}")
        raise ValidationError("Request body must be a JSON object")
    return data
