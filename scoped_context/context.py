"""Module for defining and using scoped context values."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union, overload

from scoped_context.exceptions import NoActiveScopeNoDefaultError
from scoped_context.store import get_scope

T_ = TypeVar('T_')


class _Missing(Enum):
    MISSING = 'MISSING'

    def __repr__(self) -> str:
        return '<MISSING>'


MISSING = _Missing.MISSING


@dataclass(frozen=True, eq=False)
class Context(Generic[T_]):
    """Context definition.

    Contexts are compared by identity: two definitions with the same name
    never share values. The name is used for diagnostics only.

    Attributes:
        name (str): Name of the context.
        default (Union[T_, _Missing]): Default value or ``MISSING``.
        key (object): Unique key of the context values.
    """
    name: str
    default: Union[T_, _Missing] = MISSING
    key: object = field(init=False, default_factory=object, repr=False)

    @property
    def has_default(self) -> bool:
        """The context has a default value."""
        return self.default is not MISSING


@overload
def create_context(name: str) -> Context[Optional[Any]]: ...
@overload
def create_context(name: str, default: T_) -> Context[T_]: ...
def create_context(name: str, default: Any = MISSING) -> Context[Any]:  # noqa: ANN401
    """Create a context definition.

    A context without a default can only be read inside a scope.

    Args:
        name (str): Name of the context.
        default (Any, optional): Default value, so the context always has it.
    """
    return Context(name=name, default=default)


def with_context(context: Context[T_], value: Union[T_, Callable[[T_], T_]]) -> None:
    """Define a new context value for the current scope.

    A callable value receives the current value of the context and returns
    the new one. It's better to create your own specialized functions:

    >>> def with_tenant(tenant_id: str) -> None:
    >>>     with_context(Tenant, lambda parent: parent.child(tenant_id))

    To store a callable as the value itself, wrap it: ``lambda _: func``.

    Args:
        context (Context[T_]): Context definition.
        value (Union[T_, Callable[[T_], T_]]): Context value or a function
            deriving it from the current one.

    Raises:
        NoActiveScopeError: Called outside any scope.
    """
    scope = get_scope()
    if callable(value):
        value = value(scope.get(context))  # type: ignore[arg-type]
    scope.set(context, value)  # type: ignore[arg-type]


def use_context(context: Context[T_]) -> T_:
    """Get the context value of the current scope.

    Outside any scope the default value is returned. You can easily create
    your own hooks:

    >>> def use_tenant() -> Tenant:
    >>>     return use_context(Tenant)

    Args:
        context (Context[T_]): Context definition.

    Raises:
        NoActiveScopeNoDefaultError: Called outside any scope for a context
            without a default value.
    """
    scope = get_scope(optional=True)

    if scope is None:
        if context.has_default:
            return context.default  # type: ignore[return-value]

        msg = (
            f"Can't use {context.name!r} context value outside dispatcher flow "
            'without default value\n'
            '  - Define default value of context in create_context function\n'
            '  - Wrap function which uses use_context with dispatch\n'
        )
        raise NoActiveScopeNoDefaultError(msg)

    return scope.get(context)  # type: ignore[return-value]
