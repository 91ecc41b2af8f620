"""
Ghostagotchi Logging Infrastructure

Exports the structured logging subsystem and the log context helper.
"""

from ghostagotchi.core.logging.logger import (
    LogContext,
    LoggerConfig,
    dropped_log_records,
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "dropped_log_records",
    "LogContext",
    "LoggerConfig",
]
