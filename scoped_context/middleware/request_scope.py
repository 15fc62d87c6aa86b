"""Module for declaring the current request context."""

from collections.abc import MutableMapping
from typing import Any, Optional

from scoped_context.context import Context, create_context, use_context

Scope = MutableMapping[str, Any]

RequestScope: Context[Optional[Scope]] = create_context('request_scope', None)


def use_request_scope() -> Optional[Scope]:
    """Get the ASGI scope of the current request or ``None``."""
    return use_context(RequestScope)
