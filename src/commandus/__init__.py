"""commandus — synchronous in-process command bus.

Routes each command to exactly one handler, fills extra handler
parameters from named value providers, and wraps execution in middleware.
Optional pydantic for the ``Command`` base and validation.
"""

from __future__ import annotations

# ── Bus ──────────────────────────────────────────────────────────
from .bus import (
    DEFAULT_PROVIDER_NAME,
    BoundHandler,
    Bus,
    BusBuilder,
    Command,
    HandlerDescriptor,
    HandlerRegistry,
    ProviderDescriptor,
    ProviderRegistry,
    TypeNamePair,
    extract_handlers,
    extract_providers,
    handler,
    provider,
)
from .correlation import (
    CorrelationIdPropagator,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

# ── Middleware ───────────────────────────────────────────────────
from .middleware import (
    LoggingMiddleware,
    ValidatorMiddleware,
    build_pipeline,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    ICommandBus,
    IHandlerSource,
    IMiddleware,
    IProviderSource,
    IValidator,
    NextHandler,
)

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
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

# ── Validation ──────────────────────────────────────────────────
from .validation import PydanticValidator, ValidationResult

__all__: list[str] = [
    # Bus
    "Bus",
    "BusBuilder",
    "BoundHandler",
    "Command",
    "DEFAULT_PROVIDER_NAME",
    "HandlerDescriptor",
    "HandlerRegistry",
    "ProviderDescriptor",
    "ProviderRegistry",
    "TypeNamePair",
    "extract_handlers",
    "extract_providers",
    "handler",
    "provider",
    "CorrelationIdPropagator",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    # Ports
    "ICommandBus",
    "IHandlerSource",
    "IMiddleware",
    "IProviderSource",
    "IValidator",
    "NextHandler",
    # Middleware
    "LoggingMiddleware",
    "ValidatorMiddleware",
    "build_pipeline",
    # Validation
    "PydanticValidator",
    "ValidationResult",
    # Primitives
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
