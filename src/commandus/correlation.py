"""Correlation ID management for commands flowing through the bus."""

from __future__ import annotations

import contextlib
import uuid
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from .ports.middleware import IMiddleware

if TYPE_CHECKING:
    from .ports.middleware import NextHandler

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


class CorrelationIdPropagator(IMiddleware):
    """Middleware that keeps the context and the command's correlation ID in step.

    * If the context already carries an ID, pydantic commands without one are
      copied with it stamped in.
    * If the command carries an ID, it becomes the context ID for the rest
      of the pipeline.

    The previous context value is restored once the call returns.
    """

    def __init__(self, correlation_id_key: str = "correlation_id") -> None:
        self._key = correlation_id_key

    def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        existing_correlation = get_correlation_id()

        if (
            existing_correlation
            and not getattr(message, self._key, None)
            and hasattr(message, "model_copy")
        ):
            message = message.model_copy(update={self._key: existing_correlation})
        elif existing_correlation and not getattr(message, self._key, None):
            with contextlib.suppress(AttributeError, TypeError):
                object.__setattr__(message, self._key, existing_correlation)

        cid = getattr(message, self._key, None)
        token = _correlation_id.set(str(cid) if cid else existing_correlation)
        try:
            return next_handler(message)
        finally:
            _correlation_id.reset(token)
