"""
Logging configuration and utilities for the contribution tracker.
"""
from .config import configure_logging, get_fx_logger, get_logger

__all__ = ["configure_logging", "get_logger", "get_fx_logger"]
