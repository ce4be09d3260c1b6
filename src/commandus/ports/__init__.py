from commandus.ports.bus import ICommandBus
from commandus.ports.descriptors import (
    HandlerDescriptor,
    IHandlerSource,
    IProviderSource,
    ProviderDescriptor,
    TypeNamePair,
)
from commandus.ports.middleware import IMiddleware, NextHandler
from commandus.ports.validation import IValidator

__all__ = [
    "HandlerDescriptor",
    "ICommandBus",
    "IHandlerSource",
    "IMiddleware",
    "IProviderSource",
    "IValidator",
    "NextHandler",
    "ProviderDescriptor",
    "TypeNamePair",
]
