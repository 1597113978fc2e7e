"""
Skyward Notes — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the failures that are NOT
       recoverable inside a request.
How:   Each exception carries a user-safe message and an optional context
       dict. Global handlers (registered in main.py) log the context and
       answer with a generic error page.

Exception Hierarchy:
    SkywardError (base)
    ├── StorageError        → 500 (connection failure, constraint violation)
    └── ConfigurationError  → raised at startup, never reaches a request

Form validation problems are not exceptions: the request handler collects
them as plain messages and re-renders the page.
"""

from typing import Any, Dict, Optional


class SkywardError(Exception):
    """
    Base exception for all Skyward Notes application errors.

    Attributes:
        message:  User-facing error description (safe to show)
        context:  Additional debug info (logged, never rendered)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class StorageError(SkywardError):
    """
    Raised when the underlying database engine fails.

    What:    Wraps any SQLAlchemy error raised while talking to the `notes` table.
    When:    Connection lost, server unreachable, constraint violation.
    HTTP:    500 Internal Server Error

    The store performs no retries; the request fails as a whole. Every
    statement is committed on its own, so there is never a partial write
    to roll back.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation


class ConfigurationError(SkywardError):
    """
    Raised when settings cannot produce a usable database engine.

    When:    During create_app(), e.g. an unknown driver in DATABASE_URL.
    """

    def __init__(
        self,
        message: str = "Invalid application configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
