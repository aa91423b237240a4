"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

Design:
- One JSON object per record, handed to the standard logging module
- Records propagate: the application's handlers (console, --log-file)
  decide where they go
- Every entry names the emitting thread (render loop vs input thread)
- Typed events (LogEvent enum), also attached to the LogRecord as
  record.event for handler-side filtering

Example:
    >>> slog = StructuredLogger(component="render_loop", context={'surface': '1280x720'})
    >>> slog.debug(
    ...     event=LogEvent.RENDER_FRAME_DRAWN,
    ...     message="Frame drawn",
    ...     metadata={'render_ms': 4.2, 'features': 120}
    ... )

Output:
    {"timestamp": "2026-10-19T15:30:45.123456+00:00", "level": "DEBUG",
     "component": "render_loop", "thread": "RenderLoopThread",
     "event": "render.frame.drawn", "message": "Frame drawn",
     "context": {"surface": "1280x720"},
     "metadata": {"render_ms": 4.2, "features": 120}}
"""

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .events import LogEvent

LOGGER_PREFIX = "geoview_render"


class StructuredLogger:
    """
    JSON structured logger for one component.

    Attributes:
        component: Component name ("render_loop", "view")
        context: Fields repeated on every entry (e.g. surface size)
        logger: Underlying Python logger instance

    Without an explicit level the logger inherits from the
    "geoview_render" tree, so the CLI's -v reaches per-frame entries.
    """

    def __init__(
        self,
        component: str,
        level: Optional[int] = None,
        logger_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.component = component
        self.context: Dict[str, Any] = dict(context or {})
        self.logger = logging.getLogger(logger_name or f"{LOGGER_PREFIX}.{component}")
        if level is not None:
            self.logger.setLevel(level)

    def bind(self, **fields: Any) -> "StructuredLogger":
        """Logger for the same component with extra context fields."""
        child = StructuredLogger.__new__(StructuredLogger)
        child.component = self.component
        child.context = {**self.context, **fields}
        child.logger = self.logger
        return child

    def _emit(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        # Per-frame DEBUG entries are the hot path; skip the JSON work
        if not self.logger.isEnabledFor(level):
            return

        entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': logging.getLevelName(level),
            'component': self.component,
            'thread': threading.current_thread().name,
            'event': event.value,
            'message': message,
        }
        if self.context:
            entry['context'] = self.context
        if metadata:
            entry['metadata'] = metadata
        if exc_info is not None:
            entry['exception'] = {'type': type(exc_info).__name__, 'message': str(exc_info)}

        self.logger.log(
            level,
            json.dumps(entry, default=str),
            exc_info=exc_info if level >= logging.ERROR else None,
            extra={'event': event.value},
        )

    def debug(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.INFO, event, message, metadata)

    def warning(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        """
        Log an ERROR entry.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception instance; its traceback goes to the handlers
        """
        self._emit(logging.ERROR, event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)


def create_logger(component: str, level: int = logging.INFO, **context: Any) -> StructuredLogger:
    """
    Factory for a component logger.

    Example:
        >>> slog = create_logger("render_loop", level=logging.DEBUG, surface="640x480")
    """
    return StructuredLogger(component=component, level=level, context=context)
