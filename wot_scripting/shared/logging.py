"""
Logging Configuration - Shared Layer

Structured logging for the service. Standard library handlers do the I/O,
structlog renders every record (console output in development, JSON in
production) so that events emitted through ``get_logger`` and records from
third-party libraries end up in the same format.
"""

import logging
import os
import sys
import uuid
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from wot_scripting.shared.consts import EnumEnvironment

def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """
    Read the bootstrap logging configuration from environment variables.

    Used before the settings system is loaded.
    """
    return {
        "level": os.environ.get("LOG_LEVEL", "INFO"),
        "file_path": os.environ.get("LOG_FILE_PATH"),
    }


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    return handlers


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure the standard logging system and structlog on top of it.

    Call once at startup, before settings are loaded, and again through
    ``update_logging_from_settings`` once they are.

    Args:
        level: Optional override for the log level.
        file_path: Optional log file written in addition to stdout.
        environment: Application environment (development, production, ...).
    """
    env_config = _get_log_config_from_env()

    log_level = level or env_config["level"] or "INFO"
    log_file = file_path or env_config["file_path"]
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )

    handlers = _build_handlers(log_file)
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    # httpx logs every request at INFO, too chatty next to operation events
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))

    logging.info(f"Logging configured with level: {log_level}")
    if log_file:
        logging.info(f"Logging to file: {log_file}")


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the loaded application settings.

    Args:
        settings: The application settings object from Pydantic.
    """
    try:
        log_level = (
            settings.logging.level.value
            if hasattr(settings.logging.level, "value")
            else settings.logging.level
        )
        environment = (
            settings.environment.value
            if hasattr(settings.environment, "value")
            else settings.environment
        )

        configure_logging(
            level=log_level,
            file_path=settings.logging.file_path,
            environment=environment,
        )

        logging.info("Logging configuration updated from application settings")
    except Exception as e:
        logging.error(f"Failed to update logging from settings: {e}")


def bind_request_context(**values: Any) -> str:
    """
    Bind a fresh request id (plus any extra values) to the logging context.

    Every event logged from the current task carries these values until
    ``clear_request_context`` is called.

    Returns:
        The generated request id.
    """
    request_id = uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **values)
    return request_id


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
