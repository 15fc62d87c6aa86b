"""Middleware for scoped context package."""
from .dispatch import DispatchMiddleware
from .request_scope import RequestScope, use_request_scope

__all__ = (
    'DispatchMiddleware',
    'RequestScope',
    'use_request_scope',
)
