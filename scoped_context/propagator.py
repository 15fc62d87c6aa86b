"""Module for propagating the current scope through the execution flow.

This is the only place that touches :mod:`contextvars` directly. Tasks and
loop callbacks copy the context when they are created, so everything
scheduled inside a scope keeps observing it, while sibling tasks never see
each other's scope.
"""

import inspect
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Optional, TypeVar

if TYPE_CHECKING:
    from scoped_context.store import Scope

T_ = TypeVar('T_')

current_scope: ContextVar[Optional['Scope']] = ContextVar('current_scope', default=None)


def current_ambient() -> Optional['Scope']:
    """Get the scope visible at the call site.

    Returns:
        Optional[Scope]: The current scope or ``None`` outside any scope.
    """
    return current_scope.get()


def run_with_ambient(handle: 'Scope', fn: Callable[[], T_]) -> T_:
    """Call `fn` with `handle` as the current scope.

    The previous scope is restored when `fn` returns or raises. A coroutine
    or a generator returned by `fn` has not run its body yet, so it is
    wrapped to install `handle` again on every step. Tasks and futures
    are returned as is: they have already copied the context.

    Args:
        handle (Scope): The scope to install.
        fn (Callable[[], T_]): Function without arguments.

    Returns:
        T_: The result of `fn`.
    """
    token = current_scope.set(handle)
    try:
        result = fn()
    finally:
        current_scope.reset(token)

    if inspect.iscoroutine(result):
        return _bind(handle, result)  # type: ignore[return-value]
    if inspect.isgenerator(result):
        return _bind_generator(handle, result)  # type: ignore[return-value]
    if inspect.isasyncgen(result):
        return _bind_async_generator(handle, result)  # type: ignore[return-value]
    return result


async def _bind(handle: 'Scope', awaitable: Awaitable[T_]) -> T_:
    token = current_scope.set(handle)
    try:
        return await awaitable
    finally:
        current_scope.reset(token)


def _bind_generator(handle: 'Scope', generator: Generator[Any, Any, T_]) -> Generator[Any, Any, T_]:
    sent: Any = None
    error: Optional[BaseException] = None
    while True:
        token = current_scope.set(handle)
        try:
            if error is None:
                item = generator.send(sent)
            else:
                item = generator.throw(error)
        except StopIteration as stop:
            return stop.value  # type: ignore[no-any-return]
        finally:
            current_scope.reset(token)
            error = None

        try:
            sent = yield item
        except GeneratorExit:
            token = current_scope.set(handle)
            try:
                generator.close()
            finally:
                current_scope.reset(token)
            raise
        except BaseException as exc:  # noqa: BLE001
            error = exc


async def _bind_async_generator(
    handle: 'Scope',
    generator: AsyncGenerator[Any, Any],
) -> AsyncGenerator[Any, Any]:
    sent: Any = None
    error: Optional[BaseException] = None
    while True:
        token = current_scope.set(handle)
        try:
            if error is None:
                item = await generator.asend(sent)
            else:
                item = await generator.athrow(error)
        except StopAsyncIteration:
            return
        finally:
            current_scope.reset(token)
            error = None

        try:
            sent = yield item
        except GeneratorExit:
            token = current_scope.set(handle)
            try:
                await generator.aclose()
            finally:
                current_scope.reset(token)
            raise
        except BaseException as exc:  # noqa: BLE001
            error = exc
