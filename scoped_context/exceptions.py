"""Exception module."""

class ContextError(Exception):
    """Basic exception."""

class NoActiveScopeError(ContextError):
    """There is no current scope to define the context value in."""

class NoActiveScopeNoDefaultError(NoActiveScopeError):
    """The context value is used outside any scope and has no default."""
