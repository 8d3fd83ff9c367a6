"""Custom exceptions for the RecGate gateway.

Defines specific exception types for errors raised while talking to the
recommendation engine, so the API layer can report them to callers.
"""

from typing import Any, Dict, Optional


class RecGateException(Exception):
    """Base exception for RecGate errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class EngineError(RecGateException):
    """Raised when a call to the recommendation engine fails."""

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: int = 502,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation = operation
        super().__init__(
            message=message,
            status_code=status_code,
            details={"operation": operation, **(details or {})},
        )


class EngineUnavailableError(EngineError):
    """Raised when the engine cannot be reached.

    The endpoint and the transport error stay on the exception for logging;
    only the error type is reported to callers.
    """

    def __init__(self, operation: str, endpoint: str, error: Exception):
        self.endpoint = endpoint
        self.error = error
        super().__init__(
            operation,
            "Recommendation engine is unreachable",
            status_code=502,
            details={"error_type": type(error).__name__},
        )


class EngineTimeoutError(EngineError):
    """Raised when the engine does not answer within the configured timeout."""

    def __init__(self, operation: str, timeout: float):
        message = f"Recommendation engine did not respond within {timeout}s"
        super().__init__(
            operation,
            message,
            status_code=504,
            details={"timeout_seconds": timeout},
        )


class EngineResponseError(EngineError):
    """Raised when the engine answers with an error status or an unreadable body."""

    def __init__(self, operation: str, upstream_status: int, upstream_body: str):
        message = (
            f"Recommendation engine rejected '{operation}' "
            f"with status {upstream_status}"
        )
        super().__init__(
            operation,
            message,
            status_code=502,
            details={
                "upstream_status": upstream_status,
                "upstream_body": upstream_body,
            },
        )
