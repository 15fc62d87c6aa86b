"""Configuration Module."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScopeSettings(BaseSettings):
    """Configuration of the request scopes and of the scoped log values.

    Can be nested into the application settings as ``scope: ScopeSettings``
    with ``env_nested_delimiter='__'``, or read directly from the
    ``SCOPED_CONTEXT_*`` environment variables.

    Attributes:
        request_id_header (str): Header with the request ID, in any case.
        bind_request (bool): Bind the method, path and client of the request
            to the logger of the request scope.
        log_key (Optional[str]): Key of the log entry that collects the values
            of the scoped contexts. ``None`` puts them at the top level.
    """
    model_config = SettingsConfigDict(
        env_prefix='SCOPED_CONTEXT_',
        env_ignore_empty=True,
        env_nested_delimiter='__',
        extra='ignore',
    )

    request_id_header: str = Field(
        default='x-request-id',
        description='Header with the request ID',
    )
    bind_request: bool = Field(
        default=True,
        description='Bind the request information to the scoped logger',
    )
    log_key: Optional[str] = Field(
        default=None,
        description='Log entry key for the values of the scoped contexts',
    )

    @field_validator('request_id_header', mode='before')
    @classmethod
    def _normalize_header(cls, value: str) -> str:
        header = str(value).strip().lower()
        if not header:
            msg = 'The request ID header must not be empty'
            raise ValueError(msg)
        return header
