"""Module for adding the scoped context values to the structlog chain."""
from typing import Any, Optional

import structlog

from scoped_context.context import Context
from scoped_context.custom_processors import merge_scoped_contexts
from scoped_context.settings import ScopeSettings


def configure_scoped_logging(
    *contexts: Context[Any],
    settings: Optional[ScopeSettings] = None,
) -> None:
    """Add the values of the scoped contexts to every structlog entry.

    The merging processor is put in front of the configured chain, so the
    values reach the renderer of the application.

    >>> structlog.configure(processors=[..., structlog.processors.JSONRenderer()])
    >>> configure_scoped_logging(Tenant, User)

    Args:
        *contexts (Context[Any]): Context definitions.
        settings (Optional[ScopeSettings], optional): Scope settings.
            Read from the environment by default.
    """
    settings = settings or ScopeSettings()
    processors = structlog.get_config()['processors']
    structlog.configure(
        processors=[merge_scoped_contexts(*contexts, key=settings.log_key), *processors],
    )
