"""High-level query interfaces for guide documentation.

This module provides the user-facing search API that the MCP tools call,
hiding the indexer and parser behind a single class.
"""

from guide_mcp.docs.query.guide_search import GuideSearch, create_indexer, link_to_doc_path, normalize_sdk_method
from guide_mcp.docs.query.results import CodeSample, EndpointLookup, SdkMethodLookup, SearchHit

__all__ = [
    "GuideSearch",
    "create_indexer",
    "link_to_doc_path",
    "normalize_sdk_method",
    "SearchHit",
    "EndpointLookup",
    "CodeSample",
    "SdkMethodLookup",
]
