"""ValidationResult — outcome of validating one command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..primitives.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass
class ValidationResult:
    """Field-level messages, ``{field: [messages]}``; empty means valid.

    Usage::

        result = ValidationResult.success()
        result.add_error("quantity", "must be positive")
        result.raise_for_errors()
    """

    errors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, errors: Mapping[str, Iterable[str]]) -> ValidationResult:
        return cls({name: list(messages) for name, messages in errors.items()})

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)

    def raise_for_errors(self) -> None:
        """Raise :class:`~commandus.primitives.ValidationError` when invalid."""
        if self.errors:
            raise ValidationError({k: list(v) for k, v in self.errors.items()})

    def __bool__(self) -> bool:
        return self.is_valid
