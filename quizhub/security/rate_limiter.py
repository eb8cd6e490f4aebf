"""
Rate limiting module to slow down credential guessing.

Keeps an in-memory sliding window of request timestamps per client.
"""

from functools import wraps
from flask import request, jsonify, current_app, make_response
import threading
import time

from .security_logger import SecurityLogger


class RateLimiter:
    """
    Rate limiter that tracks requests per IP address.

    Uses a sliding window algorithm to track requests within a time period.
    Identifiers whose window has emptied are dropped, so storage only holds
    clients seen recently.
    """

    def __init__(self, cleanup_interval: int = 3600):
        self._storage: dict[str, list[float]] = {}
        self._lock = threading.Lock()
        self._cleanup_interval = cleanup_interval
        self._last_cleanup = time.time()

    def _cleanup_old_entries(self, current_time: float):
        """Drop identifiers with no timestamps inside the cleanup interval."""
        if current_time - self._last_cleanup < self._cleanup_interval:
            return

        cutoff = current_time - self._cleanup_interval
        with self._lock:
            for key in list(self._storage):
                recent = [ts for ts in self._storage[key] if ts > cutoff]
                if recent:
                    self._storage[key] = recent
                else:
                    del self._storage[key]
            self._last_cleanup = current_time

    def is_allowed(self, identifier: str, max_requests: int, window_seconds: int) -> tuple[bool, int]:
        """
        Check if a request is allowed based on rate limit.

        Args:
            identifier: Unique identifier (IP address)
            max_requests: Maximum number of requests allowed
            window_seconds: Time window in seconds

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        current_time = time.time()
        self._cleanup_old_entries(current_time)
        cutoff = current_time - window_seconds

        with self._lock:
            timestamps = [ts for ts in self._storage.get(identifier, ()) if ts > cutoff]

            if len(timestamps) >= max_requests:
                self._storage[identifier] = timestamps
                return False, 0

            timestamps.append(current_time)
            self._storage[identifier] = timestamps
            return True, max_requests - len(timestamps)

    def tracked_identifiers(self) -> int:
        with self._lock:
            return len(self._storage)

    def reset(self, identifier: str | None = None):
        """Reset rate limit for one identifier, or for everyone."""
        with self._lock:
            if identifier is None:
                self._storage.clear()
            else:
                self._storage.pop(identifier, None)


# Global rate limiter instance
_rate_limiter = RateLimiter()


def get_rate_limiter() -> RateLimiter:
    return _rate_limiter


def rate_limit(limit_key: str = 'LOGIN_RATE_LIMIT', window_key: str = 'LOGIN_RATE_WINDOW_SECONDS',
               error_message: str = "Too many attempts. Please try again later."):
    """
    Decorator to rate limit a route per client IP.

    Limits are read from app config at request time so they can be
    changed per app (and switched off with RATE_LIMIT_ENABLED).

    Example:
        @auth_bp.route('/login', methods=['POST'])
        @rate_limit()
        def login():
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_app.config.get('RATE_LIMIT_ENABLED', True):
                return f(*args, **kwargs)

            max_requests = current_app.config[limit_key]
            window_seconds = current_app.config[window_key]
            ip = request.remote_addr or 'unknown'
            identifier = f"ip:{ip}:{request.endpoint}"

            is_allowed, remaining = _rate_limiter.is_allowed(identifier, max_requests, window_seconds)
            if not is_allowed:
                SecurityLogger.log_rate_limit_exceeded(identifier, request.path)
                response = make_response(jsonify({
                    'success': False,
                    'message': error_message,
                    'retry_after': window_seconds
                }), 429)
                response.headers['Retry-After'] = str(window_seconds)
                response.headers['X-RateLimit-Limit'] = str(max_requests)
                response.headers['X-RateLimit-Remaining'] = '0'
                return response

            response = make_response(f(*args, **kwargs))
            response.headers['X-RateLimit-Limit'] = str(max_requests)
            response.headers['X-RateLimit-Remaining'] = str(remaining)
            return response

        return decorated_function
    return decorator
