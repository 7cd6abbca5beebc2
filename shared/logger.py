"""
KeyForge Structured Logger
===========================

Provides :class:`ForgeLogger`, a thin structured-logging facade over the
standard :mod:`logging` package. Console records go through Rich on
stderr so they never mix with generated secrets on stdout; file records
can be written as plain text or JSON lines with rotation.

Secret material must not reach a log sink. Structured fields whose name
marks them as sensitive (``secret``, ``salt``, ``text`` ...) are replaced
by a length marker before any handler sees the record, so a careless call
such as ``log.info("done", secret=value)`` still records only
``"<redacted:16>"``.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)

_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})

SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {"secret", "secrets", "password", "salt", "text", "message"}
)

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s [%(operation)s] | %(message)s"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def redact_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Replace values of sensitive *fields* by ``<redacted:LEN>``."""
    clean: dict[str, Any] = {}
    for key, value in fields.items():
        if key.lower() in SENSITIVE_FIELDS:
            size = len(value) if hasattr(value, "__len__") else "?"
            clean[key] = f"<redacted:{size}>"
        else:
            clean[key] = value
    return clean


# ========================== Record Enrichment ==============================


class _ContextFilter(logging.Filter):
    """Stamps component, operation and redacted fields onto every record."""

    def __init__(self, owner: ForgeLogger) -> None:
        super().__init__()
        self._owner = owner

    def filter(self, record: logging.LogRecord) -> bool:
        record.component = self._owner.tool_name
        record.operation = self._owner.current_operation or "-"
        fields = getattr(record, "fields", None)
        record.fields = redact_fields(fields) if fields else {}
        return True


class _JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Example line::

        {"ts": "...", "level": "INFO", "component": "engine",
         "operation": "bulk", "message": "Generated 10 secrets",
         "fields": {"length": 16}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", record.name),
            "message": record.getMessage(),
        }
        operation = getattr(record, "operation", "-")
        if operation != "-":
            entry["operation"] = operation
        fields = getattr(record, "fields", None)
        if fields:
            entry["fields"] = fields
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler(level: int) -> RichHandler:
    return RichHandler(
        console=Console(theme=_LOG_THEME, stderr=True),
        level=level,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


def _file_handler(
    path: Path, level: int, *, json_lines: bool, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(
        _JSONFormatter() if json_lines else logging.Formatter(_TEXT_FORMAT)
    )
    return handler


# ========================== ForgeLogger ====================================


@dataclass
class Timer:
    """Elapsed-time holder yielded by :meth:`ForgeLogger.timed`."""

    label: str
    started: float = 0.0
    elapsed: float = 0.0


class ForgeLogger:
    """Structured logger bound to one KeyForge component.

    Usage::

        log = ForgeLogger("engine", log_file="keyforge.log", json_logs=True)
        with log.operation("generate"):
            log.info("Plan accepted", length=24, variety=4)

    Args:
        tool_name: Component name, used as the ``keyforge.<name>`` logger.
        log_level: Minimum severity name.
        log_file: Rotating log file; ``None`` disables file logging.
        json_logs: Write JSON lines instead of plain text to the file.
        max_bytes: Rotation size of the log file.
        backup_count: Rotated files to keep.
        console_output: Attach the Rich stderr handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operations: list[str] = []
        level = _resolve_level(log_level)

        self._logger = logging.getLogger(f"keyforge.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        # Re-instantiation must not stack handlers or filters
        self._logger.handlers.clear()
        self._logger.filters.clear()
        self._logger.addFilter(_ContextFilter(self))

        if console_output:
            self._logger.addHandler(_console_handler(level))
        if log_file is not None:
            self._logger.addHandler(
                _file_handler(
                    Path(log_file),
                    level,
                    json_lines=json_logs,
                    max_bytes=max_bytes,
                    backup_count=backup_count,
                )
            )

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def current_operation(self) -> str | None:
        return self._operations[-1] if self._operations else None

    @property
    def underlying(self) -> logging.Logger:
        return self._logger

    # ------------------------------------------------------------------ #
    #  Scopes
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[ForgeLogger]:
        """Tag records emitted inside the block with ``operation=name``.

        Scopes nest; the innermost name wins.
        """
        self._operations.append(name)
        try:
            yield self
        finally:
            self._operations.pop()

    @contextmanager
    def timed(self, label: str) -> Iterator[Timer]:
        """Log start and completion of *label* at DEBUG with the duration."""
        timer = Timer(label=label, started=time.perf_counter())
        self.debug("Started: %s", label)
        try:
            yield timer
        finally:
            timer.elapsed = time.perf_counter() - timer.started
            self.debug("Completed: %s", label, seconds=round(timer.elapsed, 4))

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        options = {key: kwargs.pop(key) for key in list(kwargs) if key in _LOGGING_KWARGS}
        self._logger.log(level, msg, *args, extra={"fields": kwargs}, **options)

    def debug(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, args, fields)

    def info(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.INFO, msg, args, fields)

    def warning(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.WARNING, msg, args, fields)

    def error(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.ERROR, msg, args, fields)

    def exception(self, msg: str, *args: Any, **fields: Any) -> None:
        """ERROR record carrying the active exception's traceback."""
        fields.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, fields)
