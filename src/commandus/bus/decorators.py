"""Tagging decorators for handler and provider methods."""

from __future__ import annotations

from typing import Any, TypeVar, overload

from ..primitives.exceptions import ConfigurationError

F = TypeVar("F")

#: Name given to a provider whose ``@provider`` tag carries no override.
DEFAULT_PROVIDER_NAME = "value"

HANDLER_MARKER = "__commandus_handler__"
PROVIDER_MARKER = "__commandus_provider__"


@overload
def handler(func: F) -> F: ...


@overload
def handler(func: None = None) -> Any: ...


def handler(func: Any = None) -> Any:
    """Mark a method as a command handler.

    The first parameter (after ``self``) is the command; its annotation is
    the command type. Further annotated parameters are filled from value
    providers, matched by type and, when several providers share a type,
    by parameter name.

    Usage::

        class Orders:
            @handler
            def create(self, command: CreateOrder, clock: Clock) -> str:
                ...
    """

    def decorator(fn: F) -> F:
        setattr(fn, HANDLER_MARKER, True)
        return fn

    if func is None:
        return decorator
    return decorator(func)


@overload
def provider(func: F) -> F: ...


@overload
def provider(func: None = None, *, name: str = DEFAULT_PROVIDER_NAME) -> Any: ...


def provider(func: Any = None, *, name: str = DEFAULT_PROVIDER_NAME) -> Any:
    """Mark a zero-argument method as a value provider.

    The return annotation is the produced type. ``name`` only matters when
    several providers produce the same type; it defaults to
    :data:`DEFAULT_PROVIDER_NAME`. A name that is not a non-empty string
    raises :class:`~commandus.primitives.exceptions.ConfigurationError`.

    Usage::

        class Settings:
            @provider(name="retries")
            def retries(self) -> int:
                return 3
    """
    if not isinstance(name, str) or not name:
        raise ConfigurationError(
            f"Provider name must be a non-empty string, got {name!r}"
        )

    def decorator(fn: F) -> F:
        setattr(fn, PROVIDER_MARKER, name)
        return fn

    if func is None:
        return decorator
    return decorator(func)


def is_handler(obj: Any) -> bool:
    return bool(getattr(obj, HANDLER_MARKER, False))


def provider_name(obj: Any) -> str | None:
    """Return the declared provider name, or ``None`` if *obj* is untagged."""
    name = getattr(obj, PROVIDER_MARKER, None)
    return name if isinstance(name, str) else None
