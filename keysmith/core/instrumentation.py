"""
Call Instrumentation
=====================

Decorators that add timing and usage-event tracking around pure core
calls. They are composed where the call is wired up (see
:class:`keysmith.core.engine.KeysmithEngine`); the generator and the
analyzers themselves are never modified.

Usage::

    log = KeysmithLogger("engine")
    tracker = LoggingEventTracker(log)
    generate = timed(log, "password generation")(
        tracked(tracker, "password_generated")(generator.generate)
    )
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional, Protocol, TypeVar

from shared.logger import KeysmithLogger

F = TypeVar("F", bound=Callable[..., Any])

PropertiesFn = Callable[..., Optional[dict[str, Any]]]


class EventTracker(Protocol):
    """Receiver of named usage events."""

    def track(self, event: str, properties: dict[str, Any]) -> None: ...


class LoggingEventTracker:
    """Event tracker that writes each event to a :class:`KeysmithLogger`."""

    def __init__(self, logger: KeysmithLogger) -> None:
        self._logger = logger

    def track(self, event: str, properties: dict[str, Any]) -> None:
        self._logger.debug("Event: %s", event, event=event, properties=properties)


def timed(
    logger: KeysmithLogger, label: str, level: str = "INFO"
) -> Callable[[F], F]:
    """Log the wall-clock duration of every call to the decorated function."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with logger.timed(label, level):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def tracked(
    tracker: EventTracker,
    event: str,
    properties: Optional[PropertiesFn] = None,
) -> Callable[[F], F]:
    """Emit *event* before every call to the decorated function.

    Args:
        tracker: Event receiver.
        event: Event name.
        properties: Called with the same arguments as the wrapped
            function; returns the event properties, or ``None`` to skip
            the event for this call.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            props = properties(*args, **kwargs) if properties is not None else {}
            if props is not None:
                tracker.track(event, props)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
