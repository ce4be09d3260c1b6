"""Common utility functions and helpers."""

from __future__ import annotations

from typing import Any


def qualified_name(tp: Any) -> str:
    """Return a readable, module-qualified name for *tp*.

    Builtins are shown bare (``int``); generic aliases such as
    ``list[int]`` fall back to their ``repr``.
    """
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None)
    if qualname is None or not isinstance(tp, type):
        return repr(tp)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


def describe_callable(owner: Any, method: Any) -> str:
    """Describe ``owner.method`` for error messages and logs.

    ``owner`` may be ``None`` for free functions registered through an
    explicit descriptor.
    """
    name = getattr(method, "__name__", None) or repr(method)
    if owner is None:
        module = getattr(method, "__module__", None)
        return f"{module}.{name}" if module else name
    return f"{qualified_name(type(owner))}.{name}"
