"""Search infrastructure for guide documentation.

Provides keyword extraction and relevance scoring used by the indexer.
"""

from guide_mcp.docs.search.keyword_matcher import (
    MAX_CONTENT_KEYWORDS,
    calculate_relevance_score,
    extract_keywords,
)

__all__ = [
    "extract_keywords",
    "calculate_relevance_score",
    "MAX_CONTENT_KEYWORDS",
]
