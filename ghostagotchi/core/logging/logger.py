"""
Ghostagotchi Logging
====================

Every module logs through ``get_logger(__name__)``. Records are pushed onto a
bounded queue and a listener thread fans them out to the console and to a
daily rotating JSON file, so a slow sink never stalls the event loop. When
the queue is full the record is dropped and counted.

Request context (user, guild, command, correlation id) is held in a
ContextVar bound with ``LogContext`` and stamped onto each record before it
is queued.

Output
------
- Console: JSON in production, colored text on a TTY, plain text otherwise
  (``LOG_JSON`` overrides the choice).
- File: ``logs/ghostagotchi.json.log``, rotated at midnight UTC.

Usage
-----
>>> logger = get_logger(__name__)
>>> with LogContext(user_id="42", command="POST /pet/feed"):
...     logger.info("Pet fed", extra={"xp_gained": 10})
"""

from __future__ import annotations

import json
import logging
import queue
import sys
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

from ghostagotchi.core.config.config import Config

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "ghostagotchi.json.log"
QUEUE_MAX_SIZE = 10_000

CONTEXT_FIELDS = ("user_id", "guild_id", "command", "component", "correlation_id")

# Third-party loggers that are chatty at INFO.
NOISY_LOGGERS = (
    "discord",
    "discord.http",
    "discord.gateway",
    "httpx",
    "openai",
    "asyncio",
)

_BUILTIN_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})
_listener: Optional[QueueListener] = None


@dataclass(frozen=True)
class LoggerConfig:
    """Resolved logging settings."""

    level: int
    use_json: bool
    use_colors: bool
    logs_dir: Path

    @classmethod
    def from_config(cls) -> "LoggerConfig":
        use_json = Config.is_production() if Config.LOG_JSON is None else bool(Config.LOG_JSON)
        return cls(
            level=getattr(logging, str(Config.LOG_LEVEL).upper(), logging.INFO),
            use_json=use_json,
            use_colors=not use_json and sys.stdout.isatty(),
            logs_dir=Path(Config.LOGS_DIR).resolve(),
        )


# ============================================================================
# FILTERS AND FORMATTERS
# ============================================================================


class ContextFilter(logging.Filter):
    """Copy the bound LogContext onto records; explicit ``extra`` fields win."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field, value in _log_context.get().items():
            if getattr(record, field, None) is None:
                setattr(record, field, value)
        return True


class ColoredFormatter(logging.Formatter):
    LEVEL_COLORS = {
        logging.DEBUG: "\033[90m",
        logging.INFO: "\033[94m",
        logging.WARNING: "\033[93m",
        logging.ERROR: "\033[91m",
        logging.CRITICAL: "\033[91m\033[1m",
    }
    RESET = "\033[0m"

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        return f"{color}{line}{self.RESET}" if color else line


class JSONFormatter(logging.Formatter):
    """One JSON object per record: core fields, context, then ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _BUILTIN_RECORD_ATTRS
            and key not in CONTEXT_FIELDS
            and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class DroppingQueueHandler(QueueHandler):
    """Queue handler that drops records instead of blocking on a full queue."""

    dropped = 0

    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            DroppingQueueHandler.dropped += 1


# ============================================================================
# SETUP / TEARDOWN
# ============================================================================


def _build_sinks(settings: LoggerConfig) -> List[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    if settings.use_json:
        console.setFormatter(JSONFormatter())
    elif settings.use_colors:
        console.setFormatter(ColoredFormatter(CONSOLE_FORMAT, DATE_FORMAT))
    else:
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    sinks: List[logging.Handler] = [console]

    try:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)
        daily = TimedRotatingFileHandler(
            settings.logs_dir / LOG_FILENAME,
            when="midnight",
            backupCount=1,
            encoding="utf-8",
            utc=True,
        )
    except OSError as exc:
        sys.stderr.write(f"Ghostagotchi file logging disabled: {exc}\n")
    else:
        daily.setFormatter(JSONFormatter())
        sinks.append(daily)

    for sink in sinks:
        sink.setLevel(settings.level)
    return sinks


def setup_logging(settings: Optional[LoggerConfig] = None) -> None:
    """Install the queue handler on the root logger. Idempotent."""
    global _listener

    if _listener is not None:
        return

    settings = settings or LoggerConfig.from_config()
    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(QUEUE_MAX_SIZE)

    queue_handler = DroppingQueueHandler(log_queue)
    queue_handler.addFilter(ContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(settings.level)
    root.addHandler(queue_handler)

    _listener = QueueListener(log_queue, *_build_sinks(settings), respect_handler_level=True)
    _listener.start()

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging initialized",
        extra={
            "environment": Config.ENVIRONMENT,
            "log_level": logging.getLevelName(settings.level),
            "json": settings.use_json,
            "logs_dir": str(settings.logs_dir),
        },
    )


def shutdown_logging() -> None:
    """Drain the queue, close every sink and detach from the root logger."""
    global _listener

    if _listener is None:
        return

    logging.getLogger(__name__).info("Shutting down logging subsystem")

    listener, _listener = _listener, None
    listener.stop()
    for sink in listener.handlers:
        sink.close()

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def dropped_log_records() -> int:
    return DroppingQueueHandler.dropped


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Bind request context to every record logged inside the block.

    Usable with ``with`` and ``async with``. A short correlation id is
    generated when none is given.
    """

    def __init__(
        self,
        user_id: Optional[Any] = None,
        guild_id: Optional[Any] = None,
        command: Optional[str] = None,
        component: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        context = {
            "user_id": str(user_id) if user_id is not None else None,
            "guild_id": str(guild_id) if guild_id is not None else None,
            "command": command,
            "component": component,
            "correlation_id": correlation_id or uuid.uuid4().hex[:8],
            **extra,
        }
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        self._token = _log_context.set(self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None

    async def __aenter__(self) -> "LogContext":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


setup_logging()
