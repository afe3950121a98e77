"""Configuration du journal structuré (structlog)."""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    environment: str = "development",
) -> structlog.typing.FilteringBoundLogger:
    """Configure structlog selon l'environnement.

    En développement, rendu console lisible au niveau DEBUG; en production,
    JSON au niveau INFO.
    """

    level = logging.INFO if environment == "production" else logging.DEBUG
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
            if environment == "production"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger()


def get_logger(name: str | None = None):
    """Retourne un logger structlog, nommé si `name` est fourni."""
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()
