"""Validation: ValidationResult, PydanticValidator."""

from __future__ import annotations

from .pydantic import PydanticValidator
from .result import ValidationResult

__all__ = [
    "PydanticValidator",
    "ValidationResult",
]
