"""Structlog-based logging configuration for mobcfg.

Console output is human-readable when attached to a terminal and JSON
otherwise (server consoles piped into log collectors), unless the logging
config says explicitly.
"""

import logging
import os
import sys
from collections.abc import Callable
from typing import Any

import structlog

from mobcfg.config.models import LoggingConfig


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def use_json_output(config: LoggingConfig) -> bool:
    """Decide between JSON and console rendering."""
    if config.json_logs is not None:
        return config.json_logs
    env_value = os.environ.get("MOBCFG_JSON_LOGS")
    if env_value is not None:
        return env_value.lower() == "true"
    return not sys.stdout.isatty()


def _configure_processors(config: LoggingConfig) -> list:
    """Configure structlog processors from the logging config."""
    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(dict(config.extra_fields)),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if use_json_output(config):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def _configure_handlers(config: LoggingConfig) -> None:
    """Route stdlib logging to stdout at the configured level."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.level.upper(), logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)


def configure_structlog(config: LoggingConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The LoggingConfig instance containing logging settings.
    """
    structlog.configure(
        processors=_configure_processors(config),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config)

    logger = structlog.get_logger(__name__)
    logger.debug("Structured logging configured", log_level=config.level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
