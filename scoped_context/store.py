"""Module of the hierarchical scope store."""

import functools
import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import TYPE_CHECKING, Any, Literal, Optional, TypeVar, overload

from typing_extensions import ParamSpec

from scoped_context.exceptions import NoActiveScopeError
from scoped_context.propagator import current_ambient, run_with_ambient

if TYPE_CHECKING:
    from scoped_context.context import Context

T_ = TypeVar('T_')
P_ = ParamSpec('P_')

logger = logging.getLogger(__name__)


class Scope:
    """Scope of the execution flow.

    Keeps the context values defined while the scope is current and a
    reference to the scope it was created in. Lookup walks up the chain
    of parents, so a child sees the values of its ancestors until it
    overrides them.
    """
    __slots__ = ('_values', 'parent')

    def __init__(self, parent: Optional['Scope'] = None) -> None:
        self._values: dict[object, Any] = {}
        self.parent = parent

    def get(self, context: 'Context[T_]') -> Optional[T_]:
        """Get the value of the nearest scope that defines the context.

        Args:
            context (Context[T_]): Context definition.

        Returns:
            Optional[T_]: Context value, the context default if no scope
                in the chain defines it, or ``None`` if there is no default.
        """
        scope: Optional[Scope] = self
        while scope is not None:
            if context.key in scope._values:
                return scope._values[context.key]  # type: ignore[no-any-return]
            scope = scope.parent
        return context.default if context.has_default else None

    def set(self, context: 'Context[T_]', value: T_) -> None:
        """Define the context value in this scope only."""
        self._values[context.key] = value

    def child(self) -> 'Scope':
        """Create a new child scope."""
        return Scope(self)

    @property
    def depth(self) -> int:
        """Number of ancestors of the scope."""
        depth = 0
        scope = self.parent
        while scope is not None:
            depth += 1
            scope = scope.parent
        return depth

    def __contains__(self, context: 'Context[Any]') -> bool:
        return context.key in self._values

    def __repr__(self) -> str:
        return f'<Scope depth={self.depth} values={len(self._values)}>'


@overload
def get_scope(*, optional: Literal[False] = False) -> Scope: ...
@overload
def get_scope(*, optional: bool) -> Optional[Scope]: ...
def get_scope(*, optional: bool = False) -> Optional[Scope]:
    """Get the current scope.

    Args:
        optional (bool, optional): Return ``None`` instead of raising
            outside any scope. Defaults to ``False``.

    Raises:
        NoActiveScopeError: There is no current scope and `optional` is not set.
    """
    scope = current_ambient()

    if scope is None and not optional:
        msg = "Can't define context value outside dispatcher flow"
        raise NoActiveScopeError(msg)

    return scope


@overload
def dispatch(fn: Callable[[], Awaitable[T_]]) -> Coroutine[Any, Any, T_]: ...
@overload
def dispatch(fn: Callable[[], T_]) -> T_: ...
def dispatch(fn: Callable[[], Any]) -> Any:  # noqa: ANN401
    """An entrypoint to a new scope.

    Creates a child of the current scope (or a root scope outside any
    scope) and calls `fn` inside it. A coroutine function gives a
    coroutine that must be awaited, a generator function gives a generator;
    both keep the scope across every suspension point.

    Usage example:

    >>> result = dispatch(lambda: handle(request))
    >>> result = await dispatch(lambda: handle_async(request))

    Args:
        fn (Callable[[], Any]): Function without arguments.

    Returns:
        Any: The result of `fn`.
    """
    parent = current_ambient()
    if parent is None:
        logger.debug('Dispatching a root scope')
        scope = Scope()
    else:
        scope = parent.child()
    return run_with_ambient(scope, fn)


def dispatched(func: Callable[P_, T_]) -> Callable[P_, T_]:
    """Decorator that runs every call of the function in its own scope.

    Works with plain functions, ``async def`` functions and generators.
    A generator gets its scope when it is created and keeps it while it
    is iterated.
    """
    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args: P_.args, **kwargs: P_.kwargs) -> Any:  # noqa: ANN401
            return await dispatch(functools.partial(func, *args, **kwargs))

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def wrapper(*args: P_.args, **kwargs: P_.kwargs) -> T_:
        return dispatch(functools.partial(func, *args, **kwargs))

    return wrapper
