"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    CommandusError,
    ConfigurationError,
    DispatchError,
    DispatchInvocationError,
    DuplicateHandlerError,
    DuplicateProviderError,
    HandlerNotFoundError,
    InvalidHandlerError,
    InvalidProviderError,
    ProviderNotFoundError,
    RegistryFrozenError,
    ValidationError,
)

__all__ = [
    "CommandusError",
    "ConfigurationError",
    "DispatchError",
    "DispatchInvocationError",
    "DuplicateHandlerError",
    "DuplicateProviderError",
    "HandlerNotFoundError",
    "InvalidHandlerError",
    "InvalidProviderError",
    "ProviderNotFoundError",
    "RegistryFrozenError",
    "ValidationError",
]
