"""Log processors module."""

from typing import Any, Optional

from structlog.typing import EventDict, Processor, ProcessorReturnValue, WrappedLogger

from scoped_context.context import Context
from scoped_context.store import get_scope


def merge_scoped_contexts(*contexts: Context[Any], key: Optional[str] = None) -> Processor:
    """Add the values of the contexts of the current scope to the event.

    The value is added under the name of the context. Keys that are
    already in the event, and contexts without a value, are skipped.

    Args:
        *contexts (Context[Any]): Context definitions.
        key (Optional[str], optional): Collect the values into a nested
            dictionary under this key. Defaults to `None`.

    Returns:
        Processor: Processor for the structlog chain.
    """
    def processor(
        _: WrappedLogger,
        __: str,
        event_dict: EventDict,
    ) -> ProcessorReturnValue:
        scope = get_scope(optional=True)
        target: dict[str, Any] = event_dict if key is None else {}
        for context in contexts:
            if context.name in target:
                continue
            if scope is not None:
                value = scope.get(context)
            elif context.has_default:
                value = context.default
            else:
                continue
            if value is not None:
                target[context.name] = value
        if key is not None and target:
            event_dict.setdefault(key, target)
        return event_dict

    return processor
