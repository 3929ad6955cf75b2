"""Logging setup for the share-link components."""

import json
import logging
import sys
from typing import Dict, Optional


PACKAGE_LOGGER = "madlib_links"

# Each component logs under its own child of the package logger
COMPONENT_LOGGERS = {
    "codec": "madlib_links.codec",
    "store": "madlib_links.store",
    "database": "madlib_links.database",
    "client": "madlib_links.client",
    "resolver": "madlib_links.resolver",
    "loader": "madlib_links.loader",
    "session": "madlib_links.session",
    "drafts": "madlib_links.drafts",
    "web": "madlib_links.web",
}

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class JsonLineFormatter(logging.Formatter):
    """Formats each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def component_logger(component: str, parent: Optional[logging.Logger] = None) -> logging.Logger:
    """Logger of one component, e.g. ``component_logger("store")``.

    Args:
        component: Key of COMPONENT_LOGGERS
        parent: Logger to nest under (the package logger if omitted)
    """
    if component not in COMPONENT_LOGGERS:
        raise ValueError(f"Unknown logging component: {component}")
    return (parent or logging.getLogger(PACKAGE_LOGGER)).getChild(component)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    component_levels: Optional[Dict[str, str]] = None,
) -> logging.Logger:
    """Configure the package logger and its component loggers.

    Handlers sit on the package logger only; component loggers propagate into
    it. A level in ``component_levels`` overrides ``level`` for that component,
    e.g. ``{"codec": "DEBUG"}`` to trace rejected tokens without debugging
    everything else.

    Args:
        level: Level of the package logger
        log_file: Optional file receiving the same records as stdout
        json_format: Emit JSON lines instead of plain text
        component_levels: Per-component level overrides

    Returns:
        The package logger

    Raises:
        ValueError: For an unknown component or level
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level_number(level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if json_format:
        formatter = JsonLineFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    overrides = component_levels or {}
    unknown = set(overrides) - set(COMPONENT_LOGGERS)
    if unknown:
        raise ValueError(f"Unknown logging components: {', '.join(sorted(unknown))}")

    # Components without an override follow the package level
    for component, name in COMPONENT_LOGGERS.items():
        override = overrides.get(component)
        logging.getLogger(name).setLevel(_level_number(override) if override else logging.NOTSET)

    return logger


def _level_number(level: str) -> int:
    if not isinstance(level, str) or level.upper() not in LEVELS:
        raise ValueError(f"Invalid log level: {level!r}")
    return getattr(logging, level.upper())
