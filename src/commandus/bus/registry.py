"""Handler Registry — bind handlers to command types and their providers."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import (
    DispatchInvocationError,
    DuplicateHandlerError,
    RegistryFrozenError,
)
from ..utils import qualified_name

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from ..ports.descriptors import HandlerDescriptor, ProviderDescriptor
    from .providers import ProviderRegistry

logger = logging.getLogger(__name__)


def binds(func: Callable[..., Any], args: Sequence[Any]) -> bool:
    """Return ``True`` when *args* fit the signature of *func*.

    Callables without an inspectable signature are assumed to fit.
    """
    try:
        inspect.signature(func).bind(*args)
    except TypeError:
        return False
    except ValueError:
        return True
    return True


def invoke(func: Callable[..., Any], args: Sequence[Any], source: str) -> Any:
    """Call ``func(*args)``, separating plumbing failures from user errors.

    A ``TypeError`` raised because *args* cannot be bound to *func* (or
    because *func* is not callable) becomes a
    :class:`~commandus.primitives.exceptions.DispatchInvocationError`.
    Anything raised from inside *func* propagates unchanged.
    """
    try:
        return func(*args)
    except TypeError as exc:
        if callable(func) and binds(func, args):
            raise
        raise DispatchInvocationError(source, exc) from exc


@dataclass(frozen=True)
class BoundHandler:
    """A handler descriptor with its providers resolved, ready to call.

    Providers are invoked on every call, in parameter order; their values
    are never cached.
    """

    descriptor: HandlerDescriptor
    providers: tuple[ProviderDescriptor, ...] = ()

    @property
    def source(self) -> str:
        return self.descriptor.source

    @property
    def command_type(self) -> type[Any]:
        return self.descriptor.command_type

    def __call__(self, command: Any) -> Any:
        args: list[Any] = [command]
        for provider in self.providers:
            args.append(invoke(provider.method, (), provider.source))
        return invoke(self.descriptor.method, args, self.source)


class HandlerRegistry:
    """Build-time store mapping each command type to one bound handler.

    **Conflict detection:** registering a second handler for the same
    command type raises
    :class:`~commandus.primitives.exceptions.DuplicateHandlerError`, whether
    the two handlers live on one object or on two.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Any], BoundHandler] = {}
        self._frozen = False

    # ── Registration ─────────────────────────────────────────────

    def register(
        self, descriptor: HandlerDescriptor, providers: ProviderRegistry
    ) -> tuple[type[Any], BoundHandler]:
        """Resolve the handler's extra parameters and bind it.

        Any resolution failure propagates as a configuration error.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register handler {descriptor.source}: registry is frozen"
            )

        resolved = tuple(
            providers.resolve(param.type, param.name, consumer=descriptor.source)
            for param in descriptor.parameters
        )

        command_type = descriptor.command_type
        existing = self._handlers.get(command_type)
        if existing is not None:
            raise DuplicateHandlerError(
                command_type, existing.source, descriptor.source
            )

        bound = BoundHandler(descriptor, resolved)
        self._handlers[command_type] = bound
        logger.debug(
            "Registered command handler %s -> %s (%d provided value(s))",
            command_type.__name__,
            descriptor.source,
            len(resolved),
        )
        return command_type, bound

    def freeze(self) -> Mapping[type[Any], BoundHandler]:
        """Reject further registration and return a read-only dispatch map."""
        self._frozen = True
        return MappingProxyType(dict(self._handlers))

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ── Lookup ───────────────────────────────────────────────────

    def get_command_handler(self, command_type: type[Any]) -> BoundHandler | None:
        return self._handlers.get(command_type)

    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[str, str]:
        """Snapshot of ``{qualified command name: handler source}``."""
        return {qualified_name(k): v.source for k, v in self._handlers.items()}

    def __len__(self) -> int:
        return len(self._handlers)


__all__ = ["BoundHandler", "HandlerRegistry", "binds", "invoke"]
