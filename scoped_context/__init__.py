"""Scoped context library.

Provides context values that propagate implicitly through nested sync
and async execution flows, a scoped structlog logger built on top of
them, and the ASGI middleware running every request in its own scope.
"""

from scoped_context.context import (
    MISSING,
    Context,
    create_context,
    use_context,
    with_context,
)
from scoped_context.exceptions import (
    ContextError,
    NoActiveScopeError,
    NoActiveScopeNoDefaultError,
)
from scoped_context.log import configure_scoped_logging
from scoped_context.logger import Logger, use_logger, with_logger
from scoped_context.settings import ScopeSettings
from scoped_context.store import Scope, dispatch, dispatched, get_scope

__all__ = (
    'MISSING',
    'Context',
    'ContextError',
    'Logger',
    'NoActiveScopeError',
    'NoActiveScopeNoDefaultError',
    'Scope',
    'ScopeSettings',
    'configure_scoped_logging',
    'create_context',
    'dispatch',
    'dispatched',
    'get_scope',
    'use_context',
    'use_logger',
    'with_context',
    'with_logger',
)
