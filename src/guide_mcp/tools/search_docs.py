"""Guide Search Tool - Keyword search over indexed guide documents."""

from typing import Any

from fastmcp import FastMCP

from guide_mcp.contracts import build_guide_data, build_ok
from guide_mcp.docs.query import GuideSearch
from guide_mcp.utils import SearchLimit, SearchQuery


def register(mcp: FastMCP) -> None:
    """Register guide_search_docs tool with the MCP server."""

    @mcp.tool()
    def guide_search_docs(
        query: SearchQuery,
        limit: SearchLimit = 10,
    ) -> dict[str, Any]:
        """Search the developer guide by keywords (like grep).

        Returns matching documents with a preview and their first sections.
        Use guide_browse_document for full document or section content.

        When to use:
        - You have keywords but don't know which document covers them
        - Example: "결제창", "취소", "webhook", "API"

        Related tools:
        - guide_browse_document: Read a document or one of its sections
        - guide_get_api_endpoint: Method, URL and spec of a named API
        - guide_get_code_sample: Code samples for a topic
        """
        all_hits = GuideSearch.search(query)
        hits = all_hits[:limit]

        payload: dict[str, Any] = build_guide_data(
            source="docs",
            action="query",
            entries=[hit.to_dict() for hit in hits],
            summary={
                "count": len(hits),
                "total_matches": len(all_hits),
                "index_size": GuideSearch.get_index_size(),
            },
        )

        if not hits:
            payload["summary"]["hints"] = [
                "Try a shorter keyword (for example: 결제, cancel, webhook).",
                "Search matches titles, file names, keywords and content as substrings.",
            ]

        return build_ok(payload)
