"""Logging capability: formatted application log lines to console or file."""

from archartifacts.services.logger.base import LoggerProvider, format_log_line
from archartifacts.services.logger.factory import create_logger
from archartifacts.services.logger.routes import build_logger_router, register_logger_routes
from archartifacts.services.logger.singleton import LoggerService

__all__ = [
    "LoggerProvider",
    "LoggerService",
    "build_logger_router",
    "create_logger",
    "format_log_line",
    "register_logger_routes",
]
