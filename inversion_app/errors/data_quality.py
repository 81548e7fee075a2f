"""
Data quality error classifications for incoming payloads.

These exceptions are raised at the boundary, before a transaction or a
settings patch reaches the computations, and describe what was wrong with
the submitted data.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for input problems the caller can correct and resubmit."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """A required field is absent."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format or out of range."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format
