"""Guide SDK Method Tool - JS SDK method descriptions and examples."""

from typing import Any

from fastmcp import FastMCP

from guide_mcp.contracts import build_guide_data, build_ok
from guide_mcp.docs.query import GuideSearch
from guide_mcp.utils import SdkMethodName

MAX_METHOD_EXAMPLES = 3
MAX_PARAMETER_ROWS = 20
MAX_DESCRIPTION_CHARS = 1000


def register(mcp: FastMCP) -> None:
    """Register guide_get_sdk_method tool with the MCP server."""

    @mcp.tool()
    def guide_get_sdk_method(method_name: SdkMethodName) -> dict[str, Any]:
        """Describe a JS SDK method such as AUTHNICE.requestPay().

        Returns the best matching document's description of the method,
        JavaScript/HTML examples that call it, its parameter table and
        other related documents.

        Related tools:
        - guide_get_code_sample: Code samples for any topic
        - guide_search_docs: Keyword search
        """
        lookup = GuideSearch.get_sdk_method(method_name)

        if lookup is None:
            payload = build_guide_data(
                source="sdk_method",
                action="query",
                entries=[],
                summary={
                    "count": 0,
                    "hints": ["Try another method name (for example: requestPay, cancelPay)."],
                },
            )
            return build_ok(payload)

        description = lookup.description
        if len(description) > MAX_DESCRIPTION_CHARS:
            description = description[:MAX_DESCRIPTION_CHARS] + "..."

        entry: dict[str, Any] = {
            "method": f"AUTHNICE.{lookup.method_name}()",
            "path": lookup.document.file_path,
            "title": lookup.document.title,
            "relevance": lookup.relevance,
            "description": description,
            "code_examples": [
                {"language": block.language or "javascript", "code": block.code}
                for block in lookup.code_examples[:MAX_METHOD_EXAMPLES]
            ],
            "sections": [s.title for s in lookup.sections[:5]],
            "related_documents": [{"path": doc.file_path, "title": doc.title} for doc in lookup.related],
        }
        if lookup.parameter_table is not None:
            entry["parameters"] = lookup.parameter_table.to_dict(max_rows=MAX_PARAMETER_ROWS)

        return build_ok(
            build_guide_data(
                source="sdk_method",
                action="query",
                entries=[entry],
                summary={"count": 1},
            )
        )
