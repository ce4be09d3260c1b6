"""build_pipeline — compose middleware around the dispatch step."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..ports.middleware import IMiddleware, NextHandler


def build_pipeline(
    middlewares: Sequence[IMiddleware],
    dispatch: NextHandler,
) -> NextHandler:
    """Wrap *dispatch* in *middlewares*, the first one outermost.

    The chain is composed once, here; calling the returned function walks
    it without rebuilding anything. With no middleware, *dispatch* itself
    is returned.
    """
    pipeline = dispatch

    for mw in reversed(middlewares):

        def _step(
            message: Any,
            _mw: IMiddleware = mw,
            _next: NextHandler = pipeline,
        ) -> Any:
            return _mw(message, _next)

        pipeline = _step

    return pipeline
