"""Middleware protocol for the command pipeline."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

#: The rest of the pipeline: takes a command, returns the handler's result.
NextHandler = Callable[[Any], Any]


@runtime_checkable
class IMiddleware(Protocol):
    """Wraps the dispatch of every command passing through a bus.

    A middleware may return ``next_handler(command)`` as is, call it with a
    different command, post-process the result, or return without calling
    it at all. Middleware registered first sees the command first and the
    result last.

    Any callable with this signature qualifies, plain functions included.
    """

    def __call__(self, message: Any, next_handler: NextHandler) -> Any: ...
