"""
Passguard Structured Logger
============================

:class:`PassguardLogger` binds a component name to a stdlib logger and
attaches keyword arguments to each record as structured fields. Records
go to a Rich handler on stderr and, when configured, to a size-rotated
file as either plain text or JSON lines.

Passwords must never reach a log sink. Callers record lengths, scores,
tiers and counts only; as a backstop, any structured field whose name
mentions ``password``, ``passwd``, ``secret`` or ``token`` is replaced
with ``"[REDACTED]"`` by a logger-level filter, before any handler runs.

Record attributes set by this module:

- ``tool_name``: the bound component name (``"engine"``)
- ``operation``: the enclosing :meth:`PassguardLogger.operation` scope
- ``passguard_extra``: structured keyword fields

References:
    - OWASP Logging Cheat Sheet: Data to exclude.
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

if TYPE_CHECKING:
    from shared.config import GlobalConfig


_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)

_REDACTED = "[REDACTED]"
_SENSITIVE_MARKERS = ("password", "passwd", "secret", "token")
_RESERVED_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(operation)s] %(message)s"
_TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

_DEFAULT_MAX_BYTES = 5 * 1024 * 1024
_DEFAULT_BACKUPS = 3


def redact(fields: dict[str, Any]) -> dict[str, Any]:
    """Copy of *fields* with secret-looking keys masked."""
    return {
        key: _REDACTED if any(m in key.lower() for m in _SENSITIVE_MARKERS) else value
        for key, value in fields.items()
    }


# ===================================================================== #
#  Filters and formatters
# ===================================================================== #


class _RedactionFilter(logging.Filter):

    def filter(self, record: logging.LogRecord) -> bool:
        fields = getattr(record, "passguard_extra", None)
        if fields:
            record.passguard_extra = redact(fields)
        return True


class _JSONLinesFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``time``, ``level``, ``logger``, ``message``, then ``tool_name``
    and ``operation`` when bound, ``fields`` for structured data and
    ``exception`` for a formatted traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in ("tool_name", "operation"):
            value = getattr(record, attr, None)
            if value:
                entry[attr] = value

        fields = getattr(record, "passguard_extra", None)
        if fields:
            entry["fields"] = fields
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class _TextFormatter(logging.Formatter):
    """Plain text lines; structured fields are appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__(fmt=_TEXT_FORMAT, datefmt=_TEXT_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "operation", None) is None:
            record.operation = "-"
        line = super().format(record)
        fields = getattr(record, "passguard_extra", None)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


def _stderr_handler(level: int) -> RichHandler:
    """Rich handler on stderr, so stdout stays clean for JSON output."""
    return RichHandler(
        level=level,
        console=Console(theme=_LOG_THEME, stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
    )


def _file_handler(
    path: Path,
    level: int,
    *,
    json_lines: bool,
    max_bytes: int,
    backup_count: int,
) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(_JSONLinesFormatter() if json_lines else _TextFormatter())
    return handler


# ===================================================================== #
#  Logger facade
# ===================================================================== #


class _Stopwatch:
    """Elapsed-time reading yielded by :meth:`PassguardLogger.timed`."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed(self) -> float:
        """Seconds since the stopwatch started."""
        return time.perf_counter() - self._start


class PassguardLogger:
    """Structured logger bound to one Passguard component.

    Keyword arguments passed to the level methods become structured
    fields; an :meth:`operation` scope tags every record logged inside it.

    Usage::

        log = PassguardLogger("engine", log_level="DEBUG", console_output=False)
        log.info("Bulk analysis complete", total=250, strong=31)
        with log.operation("bulk"), log.timed("bulk analysis"):
            ...

    Args:
        tool_name: Component name; the stdlib logger is ``passguard.<tool_name>``.
        log_level: Minimum level name (``DEBUG`` ... ``CRITICAL``).
        log_file: Rotating log file path, or ``None`` for no file output.
        json_logs: Write JSON lines instead of plain text to *log_file*.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files kept.
        console_output: Attach the Rich stderr handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = _DEFAULT_MAX_BYTES,
        backup_count: int = _DEFAULT_BACKUPS,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

        logger = logging.getLogger(f"passguard.{tool_name}")
        logger.setLevel(level)
        logger.propagate = False

        # Rebuilding a logger for the same component replaces its sinks
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for existing in list(logger.filters):
            logger.removeFilter(existing)
        logger.addFilter(_RedactionFilter())

        if console_output:
            logger.addHandler(_stderr_handler(level))
        if log_file:
            logger.addHandler(_file_handler(
                Path(log_file),
                level,
                json_lines=json_logs,
                max_bytes=max_bytes,
                backup_count=backup_count,
            ))
        # Without a sink, logging's last-resort handler would write to stderr
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        self._logger = logger

    @classmethod
    def from_config(
        cls,
        tool_name: str,
        settings: GlobalConfig,
        *,
        console_output: bool = True,
    ) -> PassguardLogger:
        """Build a logger from the ``[global]`` configuration section.

        A relative ``log_file`` is placed under ``output_dir``; an empty
        one disables file logging.
        """
        log_file: Path | None = None
        if settings.log_file:
            log_file = Path(settings.log_file)
            if not log_file.is_absolute():
                log_file = Path(settings.output_dir) / log_file
        return cls(
            tool_name,
            log_level=settings.log_level,
            log_file=log_file,
            json_logs=settings.log_json,
            console_output=console_output,
        )

    # ------------------------------------------------------------------ #
    #  Scopes
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[PassguardLogger]:
        """Tag records logged inside the block with ``operation=name``."""
        previous = self._operation
        self._operation = name
        try:
            yield self
        finally:
            self._operation = previous

    @contextmanager
    def timed(self, label: str) -> Iterator[_Stopwatch]:
        """Log DEBUG start and completion lines with the elapsed time."""
        self.debug("Started: %s", label)
        watch = _Stopwatch()
        try:
            yield watch
        finally:
            self.debug("Completed: %s (%.1f ms)", label, watch.elapsed * 1000)

    # ------------------------------------------------------------------ #
    #  Level methods
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        passthrough = {k: kwargs.pop(k) for k in list(kwargs) if k in _RESERVED_KWARGS}
        extra: dict[str, Any] = {
            "tool_name": self._tool_name,
            "operation": self._operation,
        }
        if kwargs:
            extra["passguard_extra"] = kwargs
        passthrough.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, extra=extra, **passthrough)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """ERROR with the active exception's traceback attached."""
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, kwargs)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """The wrapped :class:`logging.Logger`."""
        return self._logger
