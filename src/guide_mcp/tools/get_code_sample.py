"""Guide Code Sample Tool - Code blocks related to a topic."""

from typing import Any

from fastmcp import FastMCP

from guide_mcp.contracts import build_guide_data, build_ok
from guide_mcp.docs.query import GuideSearch
from guide_mcp.utils import LanguageFilter, SampleLimit, SampleTopic, normalize_input


def register(mcp: FastMCP) -> None:
    """Register guide_get_code_sample tool with the MCP server."""

    @mcp.tool()
    def guide_get_code_sample(
        topic: SampleTopic,
        language: LanguageFilter = None,
        limit: SampleLimit = 5,
    ) -> dict[str, Any]:
        """Find code samples in the guide for a topic.

        Searches the guide for the topic, then ranks the code blocks of the
        matching documents. Optionally filters by language ("python" also
        matches "python3", and vice versa).

        When to use:
        - "결제창 호출", "Basic 인증", "결제 승인" with or without a language

        Related tools:
        - guide_get_sdk_method: JS SDK method usage
        - guide_get_api_endpoint: Endpoint spec and sample calls
        """
        lang = normalize_input(language) or None
        samples = GuideSearch.get_code_samples(topic, lang)
        shown = samples[:limit]

        payload: dict[str, Any] = build_guide_data(
            source="code_sample",
            action="query",
            entries=[sample.to_dict() for sample in shown],
            summary={
                "count": len(shown),
                "total_samples": len(samples),
                "language": lang,
            },
        )

        if not shown:
            payload["summary"]["hints"] = [
                "Try another keyword or drop the language filter.",
            ]

        return build_ok(payload)
