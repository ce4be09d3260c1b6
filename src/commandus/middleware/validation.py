"""ValidatorMiddleware — reject invalid commands before dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from ..ports.middleware import NextHandler
    from ..ports.validation import IValidator


class ValidatorMiddleware(IMiddleware):
    """Runs *validator* on each command; the handler only sees valid ones.

    An invalid result raises
    :class:`~commandus.primitives.exceptions.ValidationError` carrying the
    result's field errors.
    """

    def __init__(self, validator: IValidator) -> None:
        self._validator = validator

    def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        self._validator.validate(message).raise_for_errors()
        return next_handler(message)
