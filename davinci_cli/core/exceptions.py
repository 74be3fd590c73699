"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.

Only AuthenticationError ends the process. Every other ApplicationError is
scoped to a single operation and is recovered by the interactive shell.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class AuthenticationError(ApplicationError):
    """Raised when a session token cannot be acquired."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class NetworkError(ApplicationError):
    """Raised when a request fails at the transport level (connect, TLS, reset, timeout)."""

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(message, code="NET_TRANSPORT_ERROR")


class ParseError(ApplicationError):
    """Raised when a response body or local file is not valid JSON."""

    def __init__(self, message: str = "Invalid JSON") -> None:
        super().__init__(message, code="PARSE_INVALID_JSON")


class ValidationError(ApplicationError):
    """Raised when data does not have the expected shape."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class StorageError(ApplicationError):
    """Raised when a local blob file cannot be read or written."""

    def __init__(self, message: str = "Storage error") -> None:
        super().__init__(message, code="STORAGE_IO_ERROR")
