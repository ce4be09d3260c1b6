"""ProviderRegistry — index value providers by (type, name)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..ports.descriptors import TypeNamePair
from ..primitives.exceptions import (
    DuplicateProviderError,
    ProviderNotFoundError,
    RegistryFrozenError,
)

if TYPE_CHECKING:
    from ..ports.descriptors import ProviderDescriptor

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Build-time store of value providers.

    Providers are keyed by produced type, then by name. Resolution is
    deliberately lenient when a type has a single provider: the requested
    name is ignored. With two or more providers of a type, the name must
    match exactly.

    **Conflict detection:** registering a second provider for an occupied
    ``(type, name)`` raises
    :class:`~commandus.primitives.exceptions.DuplicateProviderError`.
    """

    def __init__(self) -> None:
        self._providers: dict[Any, dict[str, ProviderDescriptor]] = {}
        self._frozen = False

    # ── Registration ─────────────────────────────────────────────

    def register(self, descriptor: ProviderDescriptor) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register provider {descriptor.source}: registry is frozen"
            )

        key = descriptor.provides
        by_name = self._providers.setdefault(key.type, {})
        existing = by_name.get(key.name)
        if existing is not None:
            raise DuplicateProviderError(key, existing.source, descriptor.source)

        by_name[key.name] = descriptor
        logger.debug("Registered value provider %s -> %s", key, descriptor.source)

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ── Lookup ───────────────────────────────────────────────────

    def resolve(
        self, value_type: Any, name: str, *, consumer: str | None = None
    ) -> ProviderDescriptor:
        """Return the single provider satisfying ``(value_type, name)``.

        *consumer* only enriches the error message (usually the handler
        source asking for the value).
        """
        requested = TypeNamePair(value_type, name)
        by_name = self._providers.get(value_type)
        if not by_name:
            raise ProviderNotFoundError(requested, consumer=consumer)

        if len(by_name) == 1:
            return next(iter(by_name.values()))

        descriptor = by_name.get(name)
        if descriptor is None:
            raise ProviderNotFoundError(
                requested, consumer=consumer, candidates=tuple(by_name)
            )
        return descriptor

    def get_providers(self, value_type: Any) -> dict[str, ProviderDescriptor]:
        """Return the providers registered for *value_type*, keyed by name."""
        return dict(self._providers.get(value_type, {}))

    def __len__(self) -> int:
        return sum(len(by_name) for by_name in self._providers.values())


__all__ = ["ProviderRegistry"]
