"""Descriptor extraction — turn candidate objects into descriptors.

Two forms are supported:

* **Explicit**: the candidate implements
  :class:`~commandus.ports.descriptors.IHandlerSource` /
  :class:`~commandus.ports.descriptors.IProviderSource` and lists its own
  descriptors. Nothing is scanned.
* **Tagged**: methods marked with :func:`~commandus.bus.decorators.handler`
  or :func:`~commandus.bus.decorators.provider` are enumerated from the
  candidate's class and described from their annotations.
"""

from __future__ import annotations

import inspect
import logging
import typing
from typing import TYPE_CHECKING, Any

from ..ports.descriptors import (
    HandlerDescriptor,
    IHandlerSource,
    IProviderSource,
    ProviderDescriptor,
    TypeNamePair,
)
from ..primitives.exceptions import InvalidHandlerError, InvalidProviderError
from .decorators import DEFAULT_PROVIDER_NAME, is_handler, provider_name
from .registry import binds

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

_UNSUPPORTED_KINDS = {
    inspect.Parameter.VAR_POSITIONAL: "*args",
    inspect.Parameter.VAR_KEYWORD: "**kwargs",
    inspect.Parameter.KEYWORD_ONLY: "keyword-only parameters",
}


# ── Public API ───────────────────────────────────────────────────


def extract_handlers(candidate: Any) -> list[HandlerDescriptor]:
    """Return every handler descriptor *candidate* exposes.

    Raises :class:`InvalidHandlerError` for a handler whose signature cannot
    be bound (no command parameter, missing annotations, variadic or
    keyword-only parameters).
    """
    if isinstance(candidate, IHandlerSource):
        descriptors = list(candidate.command_handlers())
        for descriptor in descriptors:
            _check_handler_descriptor(candidate, descriptor)
    else:
        descriptors = [
            _describe_handler(candidate, name, func, bound)
            for name, func, bound in _tagged_methods(candidate, is_handler)
        ]

    logger.debug(
        "Extracted %d handler(s) from %s", len(descriptors), type(candidate).__name__
    )
    return descriptors


def extract_providers(candidate: Any) -> list[ProviderDescriptor]:
    """Return every provider descriptor *candidate* exposes.

    Raises :class:`InvalidProviderError` for a provider that declares
    parameters or no return annotation.
    """
    if isinstance(candidate, IProviderSource):
        descriptors = list(candidate.value_providers())
        for descriptor in descriptors:
            _check_provider_descriptor(candidate, descriptor)
    else:
        descriptors = [
            _describe_provider(candidate, name, func, bound)
            for name, func, bound in _tagged_methods(
                candidate, lambda obj: provider_name(obj) is not None
            )
        ]

    logger.debug(
        "Extracted %d provider(s) from %s", len(descriptors), type(candidate).__name__
    )
    return descriptors


# ── Tagged methods ───────────────────────────────────────────────


def _tagged_methods(
    candidate: Any, predicate: Callable[[Any], bool]
) -> Iterator[tuple[str, Any, Callable[..., Any]]]:
    """Yield ``(name, function, bound_method)`` for tagged class attributes.

    Inherited methods are included. ``staticmethod`` / ``classmethod``
    wrappers are looked through, whichever side of the tag they are on.
    """
    cls = type(candidate)
    for name in dir(cls):
        raw = inspect.getattr_static(cls, name)
        func = raw.__func__ if isinstance(raw, (staticmethod, classmethod)) else raw
        if predicate(raw) or predicate(func):
            yield name, func, getattr(candidate, name)


def _type_hints(func: Any) -> dict[str, Any]:
    return typing.get_type_hints(func)


def _describe_handler(
    candidate: Any, name: str, func: Any, bound: Callable[..., Any]
) -> HandlerDescriptor:
    try:
        hints = _type_hints(func)
    except (NameError, TypeError) as exc:
        raise InvalidHandlerError(
            candidate, name, f"has unresolvable annotations ({exc})"
        ) from exc

    params = list(inspect.signature(bound).parameters.values())
    if not params:
        raise InvalidHandlerError(
            candidate,
            name,
            "should have at least 1 parameter - the command to handle",
        )

    pairs: list[TypeNamePair] = []
    for param in params:
        kind = _UNSUPPORTED_KINDS.get(param.kind)
        if kind is not None:
            raise InvalidHandlerError(
                candidate, name, f"cannot declare {kind} ({param.name!r})"
            )
        if param.name not in hints:
            raise InvalidHandlerError(
                candidate, name, f"parameter {param.name!r} has no type annotation"
            )
        pairs.append(TypeNamePair(hints[param.name], param.name))

    command_type = pairs[0].type
    if not isinstance(command_type, type):
        raise InvalidHandlerError(
            candidate,
            name,
            f"command parameter must be annotated with a class, got {command_type!r}",
        )

    return HandlerDescriptor(
        owner=candidate,
        method=bound,
        command_type=command_type,
        parameters=tuple(pairs[1:]),
    )


def _describe_provider(
    candidate: Any, name: str, func: Any, bound: Callable[..., Any]
) -> ProviderDescriptor:
    declared = provider_name(func)
    if declared is None:
        declared = provider_name(inspect.getattr_static(type(candidate), name))
    try:
        hints = _type_hints(func)
    except (NameError, TypeError) as exc:
        raise InvalidProviderError(
            candidate, name, f"has unresolvable annotations ({exc})"
        ) from exc

    if inspect.signature(bound).parameters:
        raise InvalidProviderError(candidate, name, "should have 0 parameters")
    if "return" not in hints:
        raise InvalidProviderError(candidate, name, "has no return type annotation")

    return ProviderDescriptor(
        owner=candidate,
        method=bound,
        provides=TypeNamePair(
            hints["return"],
            declared if declared is not None else DEFAULT_PROVIDER_NAME,
        ),
    )


# ── Explicit descriptors ─────────────────────────────────────────


def _check_handler_descriptor(candidate: Any, descriptor: Any) -> None:
    if not isinstance(descriptor, HandlerDescriptor):
        raise InvalidHandlerError(
            candidate,
            "command_handlers",
            f"returned {type(descriptor).__name__}, expected HandlerDescriptor",
        )
    method_name = getattr(descriptor.method, "__name__", repr(descriptor.method))
    if not callable(descriptor.method):
        raise InvalidHandlerError(candidate, method_name, "is not callable")
    if not isinstance(descriptor.command_type, type):
        raise InvalidHandlerError(
            candidate,
            method_name,
            f"command type must be a class, got {descriptor.command_type!r}",
        )
    for pair in descriptor.parameters:
        if not isinstance(pair, TypeNamePair):
            raise InvalidHandlerError(
                candidate,
                method_name,
                f"parameters must be TypeNamePair instances, got {pair!r}",
            )
    arity = 1 + len(descriptor.parameters)
    if not binds(descriptor.method, [None] * arity):
        raise InvalidHandlerError(
            candidate,
            method_name,
            f"cannot be called with the command and {arity - 1} provided value(s)",
        )


def _check_provider_descriptor(candidate: Any, descriptor: Any) -> None:
    if not isinstance(descriptor, ProviderDescriptor):
        raise InvalidProviderError(
            candidate,
            "value_providers",
            f"returned {type(descriptor).__name__}, expected ProviderDescriptor",
        )
    method_name = getattr(descriptor.method, "__name__", repr(descriptor.method))
    if not callable(descriptor.method):
        raise InvalidProviderError(candidate, method_name, "is not callable")
    if not isinstance(descriptor.provides, TypeNamePair):
        raise InvalidProviderError(
            candidate,
            method_name,
            f"provides must be a TypeNamePair, got {descriptor.provides!r}",
        )
    if not binds(descriptor.method, ()):
        raise InvalidProviderError(candidate, method_name, "should have 0 parameters")
