# File: planner/core/logging.py

"""
Application-wide logging configuration.

Every module asks for its logger through ``get_logger(__name__)`` so the
format and level are decided in one place (``configure_logging``), which
``planner.main`` calls once when the application is created.
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging settings.

    Logs stream to stderr, which uvicorn picks up alongside its own access log.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).info("Logging initialized with level %s", level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
