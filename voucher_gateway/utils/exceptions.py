"""
Gateway Exceptions
Errors raised while forwarding to the backend, rendered by the app's
exception handler.
"""

from typing import Any, Dict, Optional

from .constants import ErrorCode


class GatewayError(Exception):
    """A failure the gateway reports to the browser with a given status"""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Any = None,
        extra: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        self.extra = extra or {}


class ConfigurationError(GatewayError):
    """Backend base URL is not configured"""

    def __init__(self, message: str = "Backend API URL is not configured."):
        super().__init__(500, ErrorCode.CONFIGURATION_ERROR, message)


class BackendUnreachableError(GatewayError):
    """Network-level failure talking to the backend"""

    def __init__(self, error: str):
        super().__init__(
            500,
            ErrorCode.BACKEND_UNREACHABLE,
            "Internal Server Error",
            extra={"error": error}
        )


class UnexpectedResponseFormatError(GatewayError):
    """Backend answered with a body that is not JSON"""

    def __init__(self, backend_status: int, body_excerpt: str):
        super().__init__(
            500,
            ErrorCode.UNEXPECTED_RESPONSE_FORMAT,
            "Unexpected response format from backend (non-JSON body)",
            details={"backend_status": backend_status, "body": body_excerpt}
        )
