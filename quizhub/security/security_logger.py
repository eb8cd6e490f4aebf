"""
Security logging module.

This module provides specialized logging for security events
such as failed logins, forbidden access and rate limit hits.
"""

from flask import current_app, has_request_context, request
from datetime import datetime, timezone


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _client_ip():
    """Remote address of the current request; None outside a request (CLI, scripts)."""
    return request.remote_addr if has_request_context() else None


class SecurityLogger:
    """
    Security event logger.

    Logs security-related events for monitoring and auditing.
    """

    @staticmethod
    def log_failed_login(email: str, reason: str = "Invalid credentials"):
        """
        Log a failed login attempt.

        Args:
            email: Email address used in login attempt
            reason: Reason for failure
        """
        current_app.logger.warning(
            f"SECURITY: Failed login attempt - Email: {email}, "
            f"IP: {_client_ip()}, Reason: {reason}, "
            f"Time: {_now()}"
        )

    @staticmethod
    def log_successful_login(user_id: int, email: str):
        current_app.logger.info(
            f"SECURITY: Successful login - User ID: {user_id}, "
            f"Email: {email}, IP: {_client_ip()}, "
            f"Time: {_now()}"
        )

    @staticmethod
    def log_forbidden(user_id: int, resource: str, reason: str):
        """
        Log an authenticated request that was refused.

        Args:
            user_id: User ID of the requester
            resource: Path or entity that was requested
            reason: Why access was refused
        """
        current_app.logger.warning(
            f"SECURITY: Forbidden - User ID: {user_id}, "
            f"Resource: {resource}, Reason: {reason}, "
            f"IP: {_client_ip()}, Time: {_now()}"
        )

    @staticmethod
    def log_rate_limit_exceeded(identifier: str, endpoint: str):
        """
        Log rate limit exceeded.

        Args:
            identifier: User or IP identifier
            endpoint: Endpoint that was rate limited
        """
        current_app.logger.warning(
            f"SECURITY: Rate limit exceeded - Identifier: {identifier}, "
            f"Endpoint: {endpoint}, IP: {_client_ip()}, "
            f"Time: {_now()}"
        )
