"""Module of the scoped logger.

Every scope can extend the logger of its parent with additional values,
for example the request ID, without passing the logger around:

>>> async def handle(request: Request) -> Response:
>>>     with_logger(request_id=request.headers['x-request-id'])
>>>     return await action.execute(request)
>>>
>>> await dispatch(lambda: handle(request))

>>> def create_user(data: User) -> None:
>>>     logger = use_logger()
>>>     logger.info('Creating new user with name %s', data.name)
"""

from typing import Any

import structlog

from scoped_context.context import Context, create_context, use_context, with_context

Logger: Context[Any] = create_context('logger', structlog.get_logger())


def use_logger() -> Any:  # noqa: ANN401
    """Get the logger of the current scope."""
    return use_context(Logger)


def with_logger(**new_values: Any) -> None:  # noqa: ANN401
    """Bind values to the logger of the current scope.

    Child scopes inherit the bound values, the parent scope is not changed.

    Raises:
        NoActiveScopeError: Called outside any scope.
    """
    with_context(Logger, lambda parent: parent.bind(**new_values))
