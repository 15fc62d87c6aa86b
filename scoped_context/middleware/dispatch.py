"""Scope dispatching middleware module."""

from collections.abc import Callable
from typing import Any, Optional

from starlette.types import ASGIApp, Receive, Scope, Send

from scoped_context.context import with_context
from scoped_context.logger import use_logger, with_logger
from scoped_context.settings import ScopeSettings
from scoped_context.store import dispatch

from .request_scope import RequestScope
from .utils import find_request_id, find_request_info


class DispatchMiddleware:
    """Middleware that runs every request in its own scope.

    The ASGI scope of the request is available via
    :func:`use_request_scope`, and the scoped logger is bound with the
    values found by `bind_func`.
    """
    def __init__(
        self,
        app: ASGIApp,
        bind_func: Optional[dict[str, Callable[[Scope, str], Any]]] = None,
        settings: Optional[ScopeSettings] = None,
    ) -> None:
        """Initialization of the dispatch middleware.

        Args:
            app (ASGIApp): ASGI application
            bind_func (Optional[dict[str, Callable[[Scope, str], Any]]], optional):
                Functions that receive the ASGI scope and the request ID header
                name and return the value bound to the logger under the key.
                ``None`` values are skipped. Defaults to `request_id`, and
                `request` if `settings.bind_request` is set.
            settings (Optional[ScopeSettings], optional): Scope settings.
                Read from the environment by default.
        """
        self.app = app
        self.settings = settings or ScopeSettings()
        if bind_func is None:
            bind_func = {'request_id': find_request_id}
            if self.settings.bind_request:
                bind_func['request'] = find_request_info
        self.bind_func = bind_func

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:  # noqa: D102
        if scope['type'] not in ('http', 'websocket'):
            await self.app(scope, receive, send)
            return

        async def handle() -> None:
            with_context(RequestScope, scope)

            _vars = {}
            for key, func in self.bind_func.items():
                data = func(scope, self.settings.request_id_header)
                if data is not None:
                    _vars[key] = data
            if _vars:
                with_logger(**_vars)

            try:
                await self.app(scope, receive, send)
            except Exception:
                use_logger().exception('Unhandled exception while handling request')
                raise

        await dispatch(handle)
