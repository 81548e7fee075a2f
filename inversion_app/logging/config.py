"""
Centralized logging configuration for the contribution tracker.

This module provides standardized logging configuration using structlog
for all components. Every module should obtain its logger through this
configuration so that rate fetches, store changes and summaries share one
structured format.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_fx_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the FX subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for rate fetching and caching
    """
    return get_logger(name).bind(subsystem="fx")


def log_rate_fetch(
    logger: FilteringBoundLogger,
    source: str,
    success: bool,
    served: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of an FX snapshot request with standardized format.

    Args:
        logger: Structlog logger instance
        source: Where the rates were requested from (URL or fetcher name)
        success: Whether the upstream fetch succeeded
        served: Which snapshot was handed out (fresh, cached, stale, fallback, none)
        context: Additional context data
    """
    bound_logger = logger.bind(
        source=source,
        fetch_result="OK" if success else "FAILED",
        served=served,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if success:
        bound_logger.info("FX rates fetched")
    else:
        bound_logger.warning("FX rate fetch failed")


def log_transaction_change(
    logger: FilteringBoundLogger,
    action: str,
    transaction_id: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a create/update/delete of a transaction.

    Args:
        logger: Structlog logger instance
        action: "created", "updated" or "deleted"
        transaction_id: Identifier of the affected transaction
        context: Additional context data
    """
    bound_logger = logger.bind(
        action=action,
        transaction_id=transaction_id,
        audit_trail=True,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Transaction changed")
