"""Command base class — optional immutable carrier for intent."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeVar

from ..correlation import get_correlation_id

TResult = TypeVar("TResult", default=None)


class Command(BaseModel, Generic[TResult]):
    """
    Optional base for commands.

    The bus routes any object by its exact class, so plain classes and
    dataclasses are valid commands too. Subclassing ``Command`` adds:

    - immutability (``frozen=True``)
    - a unique ``command_id``
    - a ``correlation_id`` inherited from the current context (see
      :func:`~commandus.correlation.get_correlation_id`), defaulting to
      ``None`` when no correlation ID is active.

    The ``TResult`` parameter documents what the handler returns; it is
    not enforced at runtime.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = Field(default_factory=get_correlation_id)
