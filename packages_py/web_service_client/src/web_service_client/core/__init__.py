"""
Core transport and URL building for web_service_client.
"""
from .base_service import WebService, ATLASSIAN_TOKEN_HEADER
from .url_builder import combine_path, combine_query, combine_url, escape, query_entry

__all__ = [
    "WebService",
    "ATLASSIAN_TOKEN_HEADER",
    "combine_url",
    "combine_path",
    "combine_query",
    "query_entry",
    "escape",
]
