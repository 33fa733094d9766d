"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any

import structlog

LOGGER_NAME = "docfetch"

_LOGGING_INITIALISED = False


def _handlers(level: str, log_dir: Path | None) -> dict[str, dict[str, Any]]:
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "plain",
        },
    }
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers["run_file"] = {
            "class": "logging.FileHandler",
            "level": "INFO",
            "filename": str(log_dir / "docfetch.log"),
            "formatter": "plain",
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "class": "logging.FileHandler",
            "level": "ERROR",
            "filename": str(log_dir / "error.log"),
            "formatter": "plain",
            "encoding": "utf-8",
        }
    return handlers


def configure_logging(
    verbose: bool = False, log_dir: Path | None = None, force: bool = False
) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return the application logger."""

    global _LOGGING_INITIALISED
    if not _LOGGING_INITIALISED or force:
        level = "DEBUG" if verbose else "INFO"
        handlers = _handlers(level, log_dir)
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "plain": {
                        "()": "pythonjsonlogger.json.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(threadName)s %(message)s",
                    }
                },
                "handlers": handlers,
                "loggers": {
                    LOGGER_NAME: {
                        "handlers": list(handlers),
                        "level": level,
                        "propagate": False,
                    },
                },
            }
        )

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger(LOGGER_NAME)


def get_logger(component: str) -> structlog.BoundLogger:
    """Return a logger under the ``docfetch`` namespace bound to a component."""

    return structlog.get_logger(f"{LOGGER_NAME}.{component}").bind(component=component)


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
