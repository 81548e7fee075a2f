"""
Error classification for the contribution tracker.

This module provides a structured exception hierarchy for bad input reaching
the boundary, failures of the storage layer and of the external FX rate source.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
    RateFetchError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    "RateFetchError",
]
