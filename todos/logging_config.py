"""
structlog setup shared by the app, the Lambda handlers and scripts.
- console: colored key/value output for local runs
- json: one JSON object per line for CloudWatch
"""

import logging
import sys

import structlog

from todos import config


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    level = (level or config.LOG_LEVEL).upper()
    fmt = fmt or config.LOG_FORMAT

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn / mangum log through the stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
