# ==============================================================================
# CUSTOM EXCEPTIONS - Application Error Hierarchy
# ==============================================================================
# Every failure in ticketdb is fatal for the run; the hierarchy only tells
# the caller what went wrong and where.
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        details: Additional context dictionary

    Example:
        >>> raise AppException(
        ...     message="Something went wrong",
        ...     error_code="INTERNAL_ERROR",
        ... )
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# CONFIGURATION EXCEPTIONS
# ==============================================================================

class ConfigurationError(AppException):
    """Raised when the run is misconfigured before any query executes."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )


class UnsupportedBackendError(ConfigurationError):
    """
    Raised when a connection string matches no supported backend prefix.

    Attributes:
        url: The rejected connection string
    """

    def __init__(
        self,
        url: str,
        supported: Optional[list] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if supported:
            details["supported_prefixes"] = list(supported)
        super().__init__(
            message=f"Need a database path, got unsupported connection string '{url}'",
            details=details,
        )
        self.error_code = "UNSUPPORTED_BACKEND"
        self.url = url


class OptionsOverrideError(ConfigurationError):
    """
    Raised when an options override file parses in none of the known formats.

    Attributes:
        path: Override file path
        errors: Parser name -> error message, in the order tried
    """

    def __init__(
        self,
        path: str,
        errors: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(
            message=f"Could not parse options override file '{path}'",
            details={"path": path, "errors": errors or {}},
        )
        self.error_code = "OPTIONS_OVERRIDE_ERROR"
        self.path = path
        self.errors = errors or {}


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to:
    - Connection issues
    - Schema creation failures
    - Query execution failures
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            details=details,
        )


class ConnectionError(DatabaseError):
    """
    Raised when the connection pool cannot be opened.
    """

    def __init__(
        self,
        message: str = "Failed to connect to database",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.error_code = "DATABASE_CONNECTION_ERROR"


class SchemaError(DatabaseError):
    """Raised when the ticket table cannot be created."""

    def __init__(
        self,
        message: str = "Failed to ensure schema",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.error_code = "SCHEMA_ERROR"


class QueryError(DatabaseError):
    """Raised when an insert or select fails."""

    def __init__(
        self,
        message: str = "Query failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.error_code = "QUERY_ERROR"
