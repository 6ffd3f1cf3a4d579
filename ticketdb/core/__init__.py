# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Exceptions, Constants
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for ticketdb:
- settings: Environment configuration management
- exceptions: Custom exception classes
- constants: Application-wide constants
"""

from ticketdb.core.settings import DatabaseType, Settings, get_settings
from ticketdb.core.exceptions import (
    AppException,
    ConfigurationError,
    ConnectionError,
    DatabaseError,
    OptionsOverrideError,
    QueryError,
    SchemaError,
    UnsupportedBackendError,
)

__all__ = [
    "DatabaseType",
    "Settings",
    "get_settings",
    "AppException",
    "ConfigurationError",
    "ConnectionError",
    "DatabaseError",
    "OptionsOverrideError",
    "QueryError",
    "SchemaError",
    "UnsupportedBackendError",
]
