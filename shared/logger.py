"""
Keysmith Structured Logger
===========================

Provides :class:`KeysmithLogger`, a logging facade that writes coloured
Rich output to stderr and, optionally, plain-text or JSON-lines records
to a rotating log file.

Records carry two context fields, ``component`` and ``operation``, so
that a log aggregator can tell generator events from analyzer events.
Password values are never passed to the logger; callers log lengths,
scores and levels only.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

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

_STANDARD_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


class _JSONFormatter(logging.Formatter):
    """Emit each record as a single-line JSON object.

    Output fields::

        {"timestamp": "...", "level": "INFO", "logger": "keysmith.engine",
         "message": "...", "component": "engine", "operation": "generate",
         "extra": {...}, "exc_info": "..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("component", "operation"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "keysmith_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class _ColorConsoleHandler(RichHandler):
    """:class:`rich.logging.RichHandler` bound to a themed stderr console."""

    def __init__(self, **kwargs: Any) -> None:
        console = Console(theme=_LOG_THEME, stderr=True)
        super().__init__(
            console=console,
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
            **kwargs,
        )


class KeysmithLogger:
    """Structured, context-aware logger for Keysmith components.

    Usage::

        log = KeysmithLogger("engine", log_file="keysmith.log", json_logs=True)
        with log.operation("generate"):
            log.info("Generated %d passwords", 5, length=16)
        with log.timed("audit"):
            run_audit()

    Extra keyword arguments (other than ``exc_info``, ``stack_info`` and
    ``stacklevel``) are collected into the record's ``extra`` field.

    Args:
        component:       Name of the component, e.g. ``"engine"``.
        log_level:       Minimum severity name.
        log_file:        Rotating log file path; ``None`` disables file logging.
        json_logs:       Emit JSON lines to the file handler.
        max_bytes:       Maximum file size before rotation (default 10 MiB).
        backup_count:    Number of rotated files to keep.
        console_output:  Attach the Rich stderr handler.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._component = component
        self._operation: str | None = None
        level = getattr(logging, log_level.upper(), logging.INFO)

        self._logger = logging.getLogger(f"keysmith.{component}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        if console_output:
            self._logger.addHandler(_ColorConsoleHandler(level=level))

        if log_file is not None:
            file_path = Path(log_file)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                filename=str(file_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            fh.setLevel(level)
            if json_logs:
                fh.setFormatter(_JSONFormatter())
            else:
                fh.setFormatter(
                    logging.Formatter(
                        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                        datefmt="%Y-%m-%dT%H:%M:%S%z",
                    )
                )
            self._logger.addHandler(fh)

    # ------------------------------------------------------------------ #
    #  Operation scope
    # ------------------------------------------------------------------ #

    class _OperationContext:
        """Temporarily binds an operation name to every record."""

        def __init__(self, parent: KeysmithLogger, operation: str) -> None:
            self._parent = parent
            self._operation = operation
            self._prev: str | None = None

        def __enter__(self) -> KeysmithLogger:
            self._prev = self._parent._operation
            self._parent._operation = self._operation
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._operation = self._prev

    def operation(self, name: str) -> _OperationContext:
        """Return a context manager that sets the ``operation`` field."""
        return self._OperationContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        extra = kwargs.pop("extra", {}) or {}

        payload: dict[str, Any] = {}
        for key in list(kwargs):
            if key not in _STANDARD_KWARGS:
                payload[key] = kwargs.pop(key)

        extra["component"] = self._component
        extra["operation"] = self._operation
        if payload:
            extra["keysmith_extra"] = payload

        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **self._enrich(kwargs))

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **self._enrich(kwargs))

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **self._enrich(kwargs))

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(msg, *args, **self._enrich(kwargs))

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an ERROR-level message with the active traceback."""
        kwargs.setdefault("exc_info", True)
        self._logger.error(msg, *args, **self._enrich(kwargs))

    # ------------------------------------------------------------------ #
    #  Timing helper
    # ------------------------------------------------------------------ #

    class _TimingContext:
        """Measures and logs the elapsed time of a block."""

        def __init__(
            self, logger_inst: KeysmithLogger, label: str, level: str = "INFO"
        ) -> None:
            self._logger = logger_inst
            self._label = label
            self._log_done = getattr(logger_inst, level.lower(), logger_inst.info)
            self._start: float = 0.0
            self.elapsed_ms: float = 0.0

        def __enter__(self) -> KeysmithLogger._TimingContext:
            self._start = time.perf_counter()
            self._logger.debug("Started: %s", self._label)
            return self

        def __exit__(self, *exc: Any) -> None:
            self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
            self._log_done(
                "Completed: %s (%.2f ms)",
                self._label,
                self.elapsed_ms,
                elapsed_ms=round(self.elapsed_ms, 3),
            )

    def timed(self, label: str, level: str = "INFO") -> _TimingContext:
        """Context manager that logs start, finish and elapsed milliseconds.

        *level* selects the severity of the completion record.
        """
        return self._TimingContext(self, label, level)

    @property
    def component(self) -> str:
        return self._component

    @property
    def underlying(self) -> logging.Logger:
        """Direct access to the stdlib :class:`logging.Logger`."""
        return self._logger
