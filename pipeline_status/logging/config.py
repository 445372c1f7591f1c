"""
Centralized logging configuration for the pipeline status resource.

This module configures structlog on top of the standard library logging
module. The resource protocol reserves stdout for the JSON response, so all
log output is written to stderr.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    stream: Optional[TextIO] = None,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        stream: Output stream, defaults to stderr
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=stream or sys.stderr,
        format="%(message)s",  # structlog will handle formatting
        force=True
    )

    # botocore is chatty at DEBUG; only surface it when explicitly asked for
    logging.getLogger("botocore").setLevel(
        logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
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
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **initial_values: Any) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    The logger stays a lazy proxy until first use, so it picks up the
    configuration made by ``configure_logging`` even when created at import time.

    Args:
        name: Logger name (typically __name__)
        initial_values: Context bound to every entry

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name, **initial_values)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for pipeline state transitions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for state transitions
    """
    return get_logger(name, subsystem="state_machine", audit_trail=True)


def get_store_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for object store access.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for store operations
    """
    return get_logger(name, subsystem="store")


def log_state_transition(
    logger: FilteringBoundLogger,
    pipeline: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a state transition with standardized format.

    Args:
        logger: Structlog logger instance
        pipeline: Name of the pipeline transitioning
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        pipeline=pipeline,
        from_state=from_state or "<unset>",
        to_state=to_state,
        trigger=trigger
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("State transition")
