"""PydanticValidator — validate pydantic commands against their own model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .result import ValidationResult


def _location(error: Any) -> str:
    return ".".join(str(part) for part in error.get("loc", ())) or "__root__"


class PydanticValidator:
    """Re-runs model validation on commands that are pydantic models.

    Catches commands built with ``model_construct`` or otherwise bypassing
    validation. Other commands pass untouched.
    """

    def validate(self, command: Any) -> ValidationResult:
        result = ValidationResult.success()
        if not isinstance(command, BaseModel):
            return result

        try:
            type(command).model_validate(command.model_dump())
        except PydanticValidationError as exc:
            for error in exc.errors():
                result.add_error(_location(error), error.get("msg", "invalid"))
        return result
