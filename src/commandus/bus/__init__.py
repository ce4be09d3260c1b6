"""Command bus: decorators, descriptors, registries, builder and dispatcher."""

from __future__ import annotations

from ..ports.descriptors import HandlerDescriptor, ProviderDescriptor, TypeNamePair
from .builder import BusBuilder
from .bus import Bus
from .command import Command
from .decorators import DEFAULT_PROVIDER_NAME, handler, provider
from .extraction import extract_handlers, extract_providers
from .providers import ProviderRegistry
from .registry import BoundHandler, HandlerRegistry

__all__ = [
    "DEFAULT_PROVIDER_NAME",
    "BoundHandler",
    "Bus",
    "BusBuilder",
    "Command",
    "HandlerDescriptor",
    "HandlerRegistry",
    "ProviderDescriptor",
    "ProviderRegistry",
    "TypeNamePair",
    "extract_handlers",
    "extract_providers",
    "handler",
    "provider",
]
