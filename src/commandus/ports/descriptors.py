"""Descriptors and descriptor sources — the explicit registration form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..utils import describe_callable, qualified_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


@dataclass(frozen=True)
class TypeNamePair:
    """Join key between a handler parameter and a provider."""

    type: Any
    name: str

    def __str__(self) -> str:
        return f"{qualified_name(self.type)} {self.name!r}"


@dataclass(frozen=True)
class HandlerDescriptor:
    """A handler method and what it needs.

    ``parameters`` excludes the command itself; it lists the extra
    arguments in the order the method expects them.
    """

    owner: Any
    method: Callable[..., Any]
    command_type: type[Any]
    parameters: tuple[TypeNamePair, ...] = ()

    @property
    def source(self) -> str:
        return describe_callable(self.owner, self.method)


@dataclass(frozen=True)
class ProviderDescriptor:
    """A zero-argument method producing a named, typed value."""

    owner: Any
    method: Callable[[], Any]
    provides: TypeNamePair

    @property
    def source(self) -> str:
        return describe_callable(self.owner, self.method)


@runtime_checkable
class IHandlerSource(Protocol):
    """An object that lists its own handler descriptors.

    When a candidate passed to ``BusBuilder.register_command_handler``
    implements this protocol, its ``@handler`` methods are **not** scanned;
    the returned descriptors are used as-is.

    Usage::

        class Billing:
            def command_handlers(self) -> list[HandlerDescriptor]:
                return [HandlerDescriptor(self, self.charge, Charge)]
    """

    def command_handlers(self) -> Iterable[HandlerDescriptor]: ...


@runtime_checkable
class IProviderSource(Protocol):
    """An object that lists its own provider descriptors."""

    def value_providers(self) -> Iterable[ProviderDescriptor]: ...
