"""Bus — the immutable dispatcher produced by :class:`BusBuilder`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import HandlerNotFoundError
from ..utils import qualified_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..ports.middleware import IMiddleware, NextHandler
    from .registry import BoundHandler

logger = logging.getLogger(__name__)


def dispatch_to(handlers: Mapping[type[Any], BoundHandler]) -> NextHandler:
    """Return the terminal step of the pipeline.

    The handler is looked up by the exact runtime type of the command that
    reaches the end of the chain, so a middleware that swaps the command
    routes the replacement.
    """

    def _dispatch(command: Any) -> Any:
        bound = handlers.get(type(command))
        if bound is None:
            raise HandlerNotFoundError(type(command))
        logger.debug("Dispatching %s to %s", type(command).__name__, bound.source)
        return bound(command)

    return _dispatch


@dataclass(frozen=True, eq=False)
class Bus:
    """Routes commands through middleware to exactly one handler.

    Instances are immutable: the dispatch map is a read-only mapping and the
    middleware pipeline is composed once, at build time. Buses compare and
    hash by identity. ``execute`` keeps all per-call state on its own
    stack, so one bus can serve concurrent callers.

    Usage::

        bus = (
            BusBuilder()
            .register_value_provider(Settings())
            .register_command_handler(Orders())
            .register_middleware(LoggingMiddleware())
            .build()
        )
        order_id = bus.execute(CreateOrder(sku="A-1"))
    """

    handlers: Mapping[type[Any], BoundHandler] = field(repr=False)
    pipeline: NextHandler = field(repr=False)
    middlewares: tuple[IMiddleware, ...] = ()

    # ── Public API ───────────────────────────────────────────────

    def execute(self, command: Any) -> Any:
        """Dispatch *command* synchronously and return the handler's result.

        Raises
        ------
        HandlerNotFoundError
            No handler is bound to ``type(command)``.
        DispatchInvocationError
            The bound handler or one of its providers could not be invoked.

        Errors raised by handlers, providers and middleware propagate
        unchanged.
        """
        command_type = type(command)
        if command_type not in self.handlers:
            raise HandlerNotFoundError(command_type)
        return self.pipeline(command)

    # ── Introspection ────────────────────────────────────────────

    def handles(self, command_type: type[Any]) -> bool:
        return command_type in self.handlers

    def registered_commands(self) -> tuple[type[Any], ...]:
        return tuple(self.handlers)

    def get_registered_handlers(self) -> dict[str, str]:
        """Snapshot of ``{qualified command name: handler source}``."""
        return {qualified_name(k): v.source for k, v in self.handlers.items()}


__all__ = ["Bus", "dispatch_to"]
