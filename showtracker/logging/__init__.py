"""Logging configuration and handlers."""

from showtracker.logging.logger import LogContext, get_logger, setup_logging

__all__ = ["LogContext", "get_logger", "setup_logging"]
