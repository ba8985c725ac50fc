"""Guide API Endpoint Tool - Method, URL and spec for a named API."""

from typing import Any

from fastmcp import FastMCP

from guide_mcp.contracts import build_error, build_guide_data, build_ok
from guide_mcp.docs.query import GuideSearch
from guide_mcp.docs.query.guide_search import MAX_REQUEST_ROWS
from guide_mcp.utils import EndpointName


def register(mcp: FastMCP) -> None:
    """Register guide_get_api_endpoint tool with the MCP server."""

    @mcp.tool()
    def guide_get_api_endpoint(endpoint_name: EndpointName) -> dict[str, Any]:
        """Look up an API endpoint in the guide's URI catalog.

        Returns the HTTP method and endpoint from the catalog table, plus the
        request parameter table, response spec preview and sample calls from
        the API's detail document when it can be found.

        When to use:
        - You know the API by name: "결제 승인", "거래 조회", "취소"

        Related tools:
        - guide_search_docs: Find documents by keywords
        - guide_get_code_sample: More code samples for a topic
        """
        lookup = GuideSearch.get_api_endpoint(endpoint_name)

        if lookup.status == "catalog_missing":
            return build_error(
                "catalog_not_found",
                "API catalog document is not indexed.",
                {"input": {"endpoint_name": endpoint_name}},
            )
        if lookup.status == "table_missing":
            return build_error(
                "endpoint_table_not_found",
                "API catalog has no API/Method/Endpoint table.",
                {"input": {"endpoint_name": endpoint_name}},
            )

        if not lookup.found or lookup.endpoint is None:
            payload = build_guide_data(
                source="endpoint",
                action="query",
                entries=[],
                summary={
                    "count": 0,
                    "related_documents": [
                        {"path": doc.file_path, "title": doc.title} for doc in lookup.suggestions
                    ],
                    "hints": ["Use a more specific API name (for example: 결제 승인, 취소, 거래 조회)."],
                },
            )
            return build_ok(payload)

        entry: dict[str, Any] = lookup.endpoint.to_dict()
        if lookup.detail is not None:
            entry["document"] = {"path": lookup.detail.file_path, "title": lookup.detail.title}
            if lookup.request_table is not None:
                entry["request_table"] = lookup.request_table.to_dict(max_rows=MAX_REQUEST_ROWS)
            if lookup.request_preview:
                entry["request_preview"] = lookup.request_preview
            if lookup.response_preview:
                entry["response_preview"] = lookup.response_preview
            entry["code_examples"] = [
                {"language": block.language, "code": block.code} for block in lookup.code_examples
            ]

        return build_ok(
            build_guide_data(
                source="endpoint",
                action="query",
                entries=[entry],
                summary={"count": 1, "detail_found": lookup.detail is not None},
            )
        )
