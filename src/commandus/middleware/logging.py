"""LoggingMiddleware — one log line per dispatch, with timing."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from ..ports.middleware import NextHandler

_default_logger = logging.getLogger("commandus.middleware")


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


class LoggingMiddleware(IMiddleware):
    """Logs each command on entry and on completion.

    Entry and completion are logged at *level*. A failing dispatch is
    logged with its traceback at ERROR and the exception is re-raised.
    """

    def __init__(
        self, logger: logging.Logger | None = None, level: int = logging.INFO
    ) -> None:
        self._logger = logger or _default_logger
        self._level = level

    def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        name = type(message).__name__
        self._logger.log(
            self._level,
            "Handling %s (correlation_id=%s)",
            name,
            getattr(message, "correlation_id", None),
        )
        started = time.perf_counter()
        try:
            result = next_handler(message)
        except Exception:
            self._logger.exception("%s failed after %.2fms", name, _elapsed_ms(started))
            raise
        self._logger.log(
            self._level, "%s completed in %.2fms", name, _elapsed_ms(started)
        )
        return result
