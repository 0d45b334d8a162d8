"""
Loguru setup for the beam verifier.

A single stderr sink is configured from Settings when this module is
imported. Each record carries extra["trace_id"] from the current request
("N/A" outside one), and records from standard-library loggers used by the
servers (uvicorn, mangum) are routed into the same sink.
"""

import logging
import sys
from typing import Any

from loguru import logger

from beam_verifier.config import Settings, settings
from beam_verifier.core.trace_context import trace_id_context

STANDARD_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "fastapi",
    "mangum",
)


def add_trace_id(record: dict[str, Any]) -> bool:
    """
    Sink filter that stamps the current trace id on the record.

    Args:
        record: Loguru record

    Returns:
        Always True, the filter never drops records
    """
    trace_id = trace_id_context.get()
    record["extra"]["trace_id"] = trace_id if trace_id else "N/A"
    return True


def configure_logger(config: Settings = settings) -> int:
    """
    Replace loguru's default sink with the configured stderr sink.

    Variable values in tracebacks (diagnose) and colors are only enabled
    in debug mode; verifier frames hold the shared secret.

    Args:
        config: Settings providing level, format and enqueue mode

    Returns:
        Id of the added sink
    """
    # Drop loguru's default handler, keep exactly one sink
    logger.remove()

    return logger.add(
        sink=sys.stderr,
        level=config.log_level.upper(),
        format=config.log_format,
        filter=add_trace_id,
        colorize=config.debug,
        backtrace=True,
        diagnose=config.debug,
        enqueue=config.logger_enqueue,
    )


class InterceptHandler(logging.Handler):
    """
    Standard logging handler that re-emits records through loguru.

    Usage:
        logging.getLogger("uvicorn").handlers = [InterceptHandler()]
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Use the loguru level of the same name when there is one
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames inside the logging module so the caller is reported
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_standard_logging() -> None:
    """
    Route standard logging into loguru.

    Call once from each entry point (main.py, lambda_main.py) before the
    server starts.
    """
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO)

    for name in STANDARD_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


# Configure logger when importing the module
configure_logger()


__all__ = ["logger", "InterceptHandler", "configure_logger", "intercept_standard_logging"]
