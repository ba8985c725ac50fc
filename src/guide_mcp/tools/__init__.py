"""Guide MCP tool implementations."""

from . import (
    browse_document,
    get_api_endpoint,
    get_code_sample,
    get_sdk_method,
    search_docs,
)

__all__ = [
    "browse_document",
    "get_api_endpoint",
    "get_code_sample",
    "get_sdk_method",
    "search_docs",
]
