"""Correlation-aware logging for markup generation.

Every record emitted through :class:`CorrelationLogger` carries the component
name and an optional correlation ID in its ``extra`` data, so log lines from
concurrent marshal calls can be told apart. Handlers are left to the
application; the library only creates loggers.
"""

import logging
from typing import Any, Dict, Optional


class CorrelationLogger:
    """Thin wrapper around :class:`logging.Logger` adding correlation context."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
            context: Extra fields attached to every record
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]
        self.context: Dict[str, Any] = dict(context or {})

    def bind(self, **context: Any) -> "CorrelationLogger":
        """Return a logger sharing this one's identity with extra context fields."""
        merged = dict(self.context)
        merged.update(context)
        return CorrelationLogger(
            self.logger.name, self.correlation_id, self.component, merged
        )

    def is_enabled_for(self, level: int) -> bool:
        """Check whether records at ``level`` would be processed."""
        return self.logger.isEnabledFor(level)

    def _extra(self, extra: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        combined: Dict[str, Any] = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        combined.update(self.context)
        if extra:
            combined.update(extra)
        return combined

    def log(
        self,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ) -> None:
        """Log ``message`` at ``level`` with correlation info."""
        if self.logger.isEnabledFor(level):
            self.logger.log(level, message, extra=self._extra(extra), exc_info=exc_info)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.WARNING, message, extra)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True,
    ) -> None:
        self.log(logging.ERROR, message, extra, exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log an error with the active exception's traceback."""
        self.log(logging.ERROR, message, extra, exc_info=True)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None,
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
