"""
Config module - Endpoint constants, default headers and settings.
"""

from .settings import (
    DEFAULT_HEADERS,
    DEFAULT_PROFILE_QUERY_ID,
    DEFAULT_SEARCH_QUERY_ID,
    DEFAULT_SETTINGS,
    PROFILE_URL_TEMPLATE,
    REQUEST_TIMEOUT_SECONDS,
    SEARCH_REFERER_URL,
    VOYAGER_GRAPHQL_URL,
)

__all__ = [
    'DEFAULT_HEADERS',
    'DEFAULT_PROFILE_QUERY_ID',
    'DEFAULT_SEARCH_QUERY_ID',
    'DEFAULT_SETTINGS',
    'PROFILE_URL_TEMPLATE',
    'REQUEST_TIMEOUT_SECONDS',
    'SEARCH_REFERER_URL',
    'VOYAGER_GRAPHQL_URL',
]
