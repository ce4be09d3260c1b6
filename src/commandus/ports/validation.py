"""IValidator — command-validation protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..validation.result import ValidationResult


@runtime_checkable
class IValidator(Protocol):
    """Checks a command before it is dispatched.

    Plugged into a bus through
    :class:`~commandus.middleware.validation.ValidatorMiddleware`.
    """

    def validate(self, command: Any) -> ValidationResult: ...
