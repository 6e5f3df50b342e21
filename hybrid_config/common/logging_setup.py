"""
Structured Logging Setup

One logger per component under the "hybrid_config" namespace.
JSON lines by default, plain text when HYBRID_CONFIG_LOG_FORMAT is not "json".
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import TextIO

LOGGER_NAMESPACE = "hybrid_config"
TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else came in through `extra`
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "component", "taskName"}

# component -> (log_level, json_format), so handlers can be rebuilt later
_components: dict[str, tuple[str, bool]] = {}


class JsonFormatter(logging.Formatter):
    """One JSON object per record: core fields, then any `extra` context"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", record.name),
            "message": record.getMessage(),
        }

        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """Tags every record with the component name"""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs["extra"] = {**kwargs.get("extra", {}), "component": self.extra["component"]}
        return msg, kwargs


def setup_logging(
    component: str,
    log_level: str = "INFO",
    json_format: bool = True,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Configure the logger for one component, replacing any earlier handler.

    Args:
        component: Component name (e.g. "config", "system.restart")
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_format: JSON lines when True, plain text otherwise
        stream: Destination, sys.stdout when omitted

    Returns:
        The configured logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{component}")
    logger.setLevel(numeric_level)

    # Dropped, not closed: the old stream may belong to someone else
    logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        JsonFormatter() if json_format
        else logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    logger.propagate = False

    _components[component] = (log_level, json_format)
    return logger


def redirect_logs(stream: TextIO) -> None:
    """
    Rebuild every component handler on another stream.

    Used by the CLI so stdout carries only its JSON result. The previous
    streams are left alone, so a stream closed since import is harmless.
    """
    for component, (log_level, json_format) in list(_components.items()):
        setup_logging(component, log_level, json_format, stream=stream)


def get_service_logger(component: str) -> ComponentLoggerAdapter:
    """
    Logger adapter for a component.

    Level and format come from HYBRID_CONFIG_LOG_LEVEL and
    HYBRID_CONFIG_LOG_FORMAT.
    """
    log_level = os.environ.get("HYBRID_CONFIG_LOG_LEVEL", "INFO")
    json_format = os.environ.get("HYBRID_CONFIG_LOG_FORMAT", "json").lower() == "json"

    logger = setup_logging(component, log_level, json_format)
    return ComponentLoggerAdapter(logger, {"component": component})
