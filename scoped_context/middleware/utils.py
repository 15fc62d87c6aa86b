"""Request information helpers."""

from typing import Any, Optional
from urllib.parse import quote

from starlette.types import Scope


def get_header(scope: Scope, name: str) -> Optional[str]:
    """Get the value of the request header.

    If the header is repeated, the last value is taken.

    Args:
        scope (Scope): ASGI scope of the request.
        name (str): Header name in any case.

    Returns:
        Optional[str]: Header value or ``None``.
    """
    name_ = name.lower().encode('latin1')
    values = [value for key, value in scope.get('headers') or () if key.lower() == name_]
    if not values:
        return None
    return values[-1].decode('latin1')  # type: ignore[no-any-return]


def get_client_addr(scope: Scope) -> str:
    """Client as ``host:port``, or an empty string for an unknown client."""
    host, port = scope.get('client') or ('', None)
    return host if port is None else f'{host}:{port}'


def get_path_with_query_string(scope: Scope) -> str:
    """Quoted path of the request followed by the raw query, ``-`` without a path."""
    path = scope.get('path')
    if path is None:
        return '-'
    query = (scope.get('query_string') or b'').decode('ascii')
    return '?'.join(filter(None, (quote(path), query)))


def find_request_id(scope: Scope, header: str = 'x-request-id') -> Optional[str]:
    """Find the request ID in the request headers."""
    return get_header(scope, header)


def find_request_info(scope: Scope, _: Optional[str] = None) -> dict[str, Any]:
    """Summary of the request bound to the logger of its scope."""
    return {
        'method': scope.get('method'),
        'path': get_path_with_query_string(scope),
        'client': get_client_addr(scope),
        'user_agent': get_header(scope, 'user-agent'),
    }
