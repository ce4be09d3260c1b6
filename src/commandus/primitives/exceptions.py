"""Configuration and dispatch exceptions for commandus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..utils import qualified_name

if TYPE_CHECKING:
    from ..ports.descriptors import TypeNamePair


class CommandusError(Exception):
    """Root exception for the entire commandus package."""


# ── Build-time (configuration) errors ────────────────────────────


class ConfigurationError(CommandusError):
    """Base class for faults detected while building a bus.

    Raised from ``BusBuilder.build()`` (or from the registries it drives);
    a bus is never produced when one of these is raised.
    """


class InvalidHandlerError(ConfigurationError):
    """Raised when a handler method has an unusable signature.

    Usage: extraction raises this for a handler without a command
    parameter, with an unannotated parameter, or with ``*args`` /
    ``**kwargs`` / keyword-only parameters.
    """

    def __init__(self, owner: Any, method_name: str, reason: str) -> None:
        self.owner_type = type(owner)
        self.method_name = method_name
        self.reason = reason
        super().__init__(
            f"Handler method {qualified_name(self.owner_type)}.{method_name} "
            f"{reason}"
        )


class InvalidProviderError(ConfigurationError):
    """Raised when a provider method has an unusable signature."""

    def __init__(self, owner: Any, method_name: str, reason: str) -> None:
        self.owner_type = type(owner)
        self.method_name = method_name
        self.reason = reason
        super().__init__(
            f"Provider method {qualified_name(self.owner_type)}.{method_name} "
            f"{reason}"
        )


class DuplicateHandlerError(ConfigurationError):
    """Raised when two handlers are bound to the same command type."""

    def __init__(self, command_type: type[Any], existing: str, duplicate: str) -> None:
        self.command_type = command_type
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Duplicate command handler for {qualified_name(command_type)}: "
            f"{existing} already registered, cannot register {duplicate}"
        )


class DuplicateProviderError(ConfigurationError):
    """Raised when two providers produce the same (type, name) pair."""

    def __init__(self, key: TypeNamePair, existing: str, duplicate: str) -> None:
        self.key = key
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Duplicate value provider for {key}: "
            f"{existing} already registered, cannot register {duplicate}"
        )


class ProviderNotFoundError(ConfigurationError):
    """Raised when a handler parameter cannot be satisfied by any provider.

    ``candidates`` lists the provider names registered for the requested
    type (empty when the type has no provider at all).
    """

    def __init__(
        self,
        requested: TypeNamePair,
        *,
        consumer: str | None = None,
        candidates: tuple[str, ...] = (),
    ) -> None:
        self.requested = requested
        self.consumer = consumer
        self.candidates = candidates

        prefix = f"{consumer} requires" if consumer else "Requested"
        if candidates:
            msg = (
                f"{prefix} value {requested}, but no provider with that name "
                f"exists (available names: {', '.join(sorted(candidates))})"
            )
        else:
            msg = (
                f"{prefix} value of type {qualified_name(requested.type)}, "
                f"but no value provider for that type is registered"
            )
        super().__init__(msg)


class RegistryFrozenError(ConfigurationError):
    """Raised when registering into a registry that has been frozen."""


# ── Dispatch-time errors ─────────────────────────────────────────


class DispatchError(CommandusError):
    """Base class for faults raised by ``Bus.execute``."""


class HandlerNotFoundError(DispatchError):
    """Raised when no handler is bound to the command's runtime type."""

    def __init__(self, command_type: type[Any]) -> None:
        self.command_type = command_type
        super().__init__(
            f"No handler registered for command {qualified_name(command_type)}"
        )


class DispatchInvocationError(DispatchError):
    """Raised when a bound handler or provider cannot be invoked at all.

    Errors raised *inside* user code are never wrapped; this only covers
    the invocation plumbing. The underlying error is kept as ``cause`` and
    as ``__cause__``.
    """

    def __init__(self, source: str, cause: BaseException) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to invoke {source}: {cause}")


# ── Validation ───────────────────────────────────────────────────


class ValidationError(CommandusError):
    """Raised when command validation fails.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))
