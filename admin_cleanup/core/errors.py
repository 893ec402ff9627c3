"""
Error types raised by the cleanup tool
"""

from typing import Optional


class CleanupError(Exception):
    """Base exception for cleanup tool errors"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(CleanupError):
    """Settings could not be loaded or validated"""


class StoreOperationFailure(CleanupError):
    """
    A record store call failed during connect, delete, find, or count.

    The original driver exception is kept on ``cause`` and is also chained
    as ``__cause__`` by the code that raises this.
    """

    def __init__(
        self,
        operation: str,
        collection: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.operation = operation
        self.collection = collection
        self.cause = cause

        target = f" on '{collection}'" if collection else ""
        message = f"Store operation '{operation}'{target} failed"
        if cause is not None:
            message = f"{message}: {cause}"

        details = {"operation": operation}
        if collection:
            details["collection"] = collection
        if cause is not None:
            details["cause"] = type(cause).__name__

        super().__init__(message, details=details)
