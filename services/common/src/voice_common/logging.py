import logging
import os
import sys

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")
_handler: logging.Handler | None = None


def setup_logging() -> logging.Logger:
    """
    Configures structured JSON logging on stdout and returns the root logger.

    Every record carries timestamp, level, logger name, message, the Datadog
    trace_id/span_id injected by ddtrace, and the service name taken from
    SERVICE_NAME. The level comes from LOG_LEVEL (INFO by default). Uvicorn
    loggers are routed through the same handler so request logs share the
    format.

    Calling it again reuses the installed handler, which lets every module
    call it at import time.
    """
    global _handler

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if _handler is not None and _handler in root_logger.handlers:
        return root_logger

    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(
        JsonFormatter(
            LOG_FORMAT,
            static_fields={"service": os.getenv("SERVICE_NAME", "transcription-api")},
        )
    )
    root_logger.handlers = [_handler]

    for logger_name in _UVICORN_LOGGERS:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = [_handler]
        u_logger.propagate = False

    return root_logger
