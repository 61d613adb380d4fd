"""Structured logging configuration using structlog.

structlog events are routed through the standard library so that the console
and the optional log file render the same event dicts, each with its own
renderer. Forwarded ticket emails carry the buyer's address, so string
values are masked and capped before they are rendered.
"""

import logging
import re
import sys
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

EMAIL_ADDRESS_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
MAX_FIELD_LENGTH = 500


def mask_email_addresses(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Replace mail addresses in string values and cap their length."""
    for key, value in event_dict.items():
        if key != "event" and isinstance(value, str):
            event_dict[key] = EMAIL_ADDRESS_RE.sub("<email>", value)[:MAX_FIELD_LENGTH]
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        mask_email_addresses,
    ]


def _formatter(renderer: Processor, pre_chain: list[Processor]) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def setup_logging(
    level: str = "INFO",
    log_format: str = "console",
    log_file: str | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Output format ("console" for pretty, "json" for structured)
        log_file: Optional file path; file output is always JSON
    """
    log_level = getattr(logging, level.upper())
    shared_processors = _shared_processors()

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(_formatter(renderer, shared_processors))
    handlers: list[logging.Handler] = [stream_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            _formatter(
                structlog.processors.JSONRenderer(),
                [*shared_processors, structlog.processors.format_exc_info],
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class LogContext:
    """Bind key/value pairs to every log event inside a ``with`` block."""

    def __init__(self, **kwargs: str | int | float | bool) -> None:
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: object) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())


def log_email_ingest(subject: str, channel: str) -> LogContext:
    """Context for one ingested email: its subject and where it came from."""
    return LogContext(email_subject=subject[:120], channel=channel)
