"""BusBuilder — collect candidates and middleware, then build a Bus."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..middleware.pipeline import build_pipeline
from ..primitives.exceptions import ConfigurationError
from .bus import Bus, dispatch_to
from .extraction import extract_handlers, extract_providers
from .providers import ProviderRegistry
from .registry import HandlerRegistry

if TYPE_CHECKING:
    from typing_extensions import Self

    from ..ports.middleware import IMiddleware

logger = logging.getLogger(__name__)


class BusBuilder:
    """Fluent registration API for a :class:`~commandus.bus.bus.Bus`.

    *Command:handler* is a **one-to-one** mapping: exactly one handler per
    command type. Several value providers may produce the same type; they
    are then told apart by name.

    Middleware runs in registration order, so after
    ``register_middleware(m1).register_middleware(m2)`` a command passes
    m1 → m2 → handler → m2 → m1.

    Nothing is inspected until :meth:`build`. The builder is not
    thread-safe; finish registering before building. Each ``build()``
    returns an independent bus, unaffected by later registrations.
    """

    def __init__(self) -> None:
        self._handler_candidates: list[Any] = []
        self._provider_candidates: list[Any] = []
        self._middlewares: list[IMiddleware] = []

    # ── Registration ─────────────────────────────────────────────

    def register_command_handler(self, command_handler: Any) -> Self:
        """Add an object exposing ``@handler`` methods (or an ``IHandlerSource``)."""
        self._handler_candidates.append(command_handler)
        return self

    def register_command_handlers(self, *command_handlers: Any) -> Self:
        for command_handler in command_handlers:
            self.register_command_handler(command_handler)
        return self

    def register_value_provider(self, value_provider: Any) -> Self:
        """Add an object exposing ``@provider`` methods (or an ``IProviderSource``)."""
        self._provider_candidates.append(value_provider)
        return self

    def register_value_providers(self, *value_providers: Any) -> Self:
        for value_provider in value_providers:
            self.register_value_provider(value_provider)
        return self

    def register_middleware(self, middleware: IMiddleware) -> Self:
        """Append *middleware*; the first registered is the outermost."""
        if not callable(middleware):
            raise ConfigurationError(
                f"Middleware {type(middleware).__name__} is not callable"
            )
        self._middlewares.append(middleware)
        logger.debug("Registered middleware %s", type(middleware).__name__)
        return self

    # ── Build ────────────────────────────────────────────────────

    def build(self) -> Bus:
        """Extract, resolve and compose everything into an immutable Bus.

        Raises a :class:`~commandus.primitives.exceptions.ConfigurationError`
        subclass on the first violated rule; no bus is produced then.
        """
        providers = ProviderRegistry()
        for candidate in self._provider_candidates:
            for provider_descriptor in extract_providers(candidate):
                providers.register(provider_descriptor)
        providers.freeze()

        registry = HandlerRegistry()
        for candidate in self._handler_candidates:
            for handler_descriptor in extract_handlers(candidate):
                registry.register(handler_descriptor, providers)
        handlers = registry.freeze()

        middlewares = tuple(self._middlewares)
        pipeline = build_pipeline(middlewares, dispatch_to(handlers))

        logger.debug(
            "Built bus: %d handler(s), %d provider(s), %d middleware",
            len(handlers),
            len(providers),
            len(middlewares),
        )
        return Bus(handlers=handlers, pipeline=pipeline, middlewares=middlewares)


__all__ = ["BusBuilder"]
