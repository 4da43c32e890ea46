"""Logging utilities for contextpack commands and services."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "contextpack"

_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
LOG_LEVELS = tuple(_LEVELS)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the contextpack hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def resolve_level(level: str | None, *, verbose: bool = False) -> int:
    """Map a level name to a ``logging`` constant; ``None`` falls back to ``verbose``."""
    if level is None:
        return logging.DEBUG if verbose else logging.INFO
    try:
        return _LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level '{level}' (expected one of: {', '.join(LOG_LEVELS)})"
        ) from None


def configure_logging(
    *,
    verbose: bool = False,
    level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure the contextpack logger.

    ``level`` names an explicit threshold and takes precedence over ``verbose``.
    Console records are prefixed with ``[contextpack]``; ``log_file`` adds a
    timestamped file sink.
    """
    resolved = resolve_level(level, verbose=verbose)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    # Repeated CLI invocations in one process would otherwise stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(resolved)
    stream_handler.setFormatter(logging.Formatter("[contextpack] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(resolved)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["LOG_LEVELS", "configure_logging", "get_logger", "resolve_level"]
