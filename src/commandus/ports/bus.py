"""Bus protocol — ICommandBus."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ICommandBus(Protocol):
    """Anything that dispatches a command to its handler and returns the result.

    Depend on this rather than on :class:`~commandus.bus.bus.Bus` to swap in
    a stub bus in tests.
    """

    def execute(self, command: Any) -> Any: ...
