"""
Centralized logging configuration for the index fund allocator.

All components log through structlog on top of the standard library logging
module. Log records are written to stderr so that the allocation report on
stdout stays machine-readable.
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
    extra_processors: Optional[list] = None,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
        stream: Destination stream, stderr when omitted
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=stream or sys.stderr,
        format="%(message)s",  # structlog will handle formatting
        force=True
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


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_pipeline_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the allocation pipeline subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for pipeline stages
    """
    logger = get_logger(name)

    return logger.bind(subsystem="pipeline")


def log_stage_completed(
    logger: FilteringBoundLogger,
    stage: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log completion of a pipeline stage with standardized format.

    Args:
        logger: Structlog logger instance
        stage: Name of the stage (fetch, decode, weight, budget, allocate, report)
        context: Additional context data
    """
    bound_logger = logger.bind(stage=stage)

    if context:
        bound_logger = bound_logger.bind(**context)

    bound_logger.info("Stage completed")
