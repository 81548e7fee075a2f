"""
System failure error classifications for collaborator outages.

These exceptions represent failures of the storage layer or of the external
FX rate source.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PersistenceError(SystemFailureError):
    """Database or file system persistence failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class RateFetchError(SystemFailureError):
    """The external FX rate source could not be reached or answered badly."""

    def __init__(self, message: str, source: Optional[str] = None,
                 status: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.status = status
