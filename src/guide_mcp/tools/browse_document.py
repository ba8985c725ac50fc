"""Guide Browse Tool - Navigate indexed documents and their sections."""

from typing import Any

from fastmcp import FastMCP
from pydantic import Field

from guide_mcp.contracts import build_error, build_guide_data, build_ok
from guide_mcp.docs.markdown import MarkdownParser
from guide_mcp.docs.query import GuideSearch
from guide_mcp.utils import normalize_input, validate_doc_path


def register(mcp: FastMCP) -> None:
    """Register guide_browse_document tool with the MCP server."""

    @mcp.tool()
    def guide_browse_document(
        path: str | None = Field(
            None,
            description=(
                "Document path relative to the guide root. Examples:\n"
                "- None or '': List all indexed documents\n"
                "- 'api/payment.md': Document outline and content\n"
                "- 'README.md': Root readme"
            ),
        ),
        section: str | None = Field(
            None,
            description=(
                "Optional section title (case-insensitive substring). "
                "Returns that section with its tables, code blocks and links."
            ),
        ),
    ) -> dict[str, Any]:
        """Browse guide documents by path (like ls + cat).

        Navigation levels:
        - No path: All indexed documents
        - Path only: Document title, section outline and full content
        - Path + section: One section with extracted tables, code and links

        Related tools:
        - guide_search_docs: Find documents by keywords (when path unknown)
        """
        # Paths keep inner whitespace; only titles are collapsed
        doc_path = (path or "").strip()
        if not doc_path:
            return build_ok(_browse_root())

        try:
            doc_path = validate_doc_path(doc_path)
        except ValueError as exc:
            return build_error("invalid_path", str(exc), {"input": {"path": path}})

        section_title = normalize_input(section)
        if section_title:
            payload = _browse_section(doc_path, section_title)
        else:
            payload = _browse_document(doc_path)
        return _wrap_payload(payload)


def _browse_root() -> dict[str, Any]:
    """Level 0: Return every indexed document."""
    docs = GuideSearch.list_documents()
    entries = [
        {"path": doc.file_path, "title": doc.title, "section_count": len(doc.sections)}
        for doc in docs
    ]
    return build_guide_data(
        source="docs",
        action="browse",
        entries=entries,
        summary={"count": len(entries)},
    )


def _document_not_found(doc_path: str) -> dict[str, Any]:
    return {
        "source": "docs",
        "action": "browse",
        "error": {
            "code": "document_not_found",
            "message": f"Document '{doc_path}' is not indexed.",
        },
        "input": {"path": doc_path},
        "hint": "Call guide_browse_document without a path to list documents.",
    }


def _browse_document(doc_path: str) -> dict[str, Any]:
    """Level 1: Document outline and content."""
    doc = GuideSearch.get_document(doc_path)
    if doc is None:
        return _document_not_found(doc_path)

    return build_guide_data(
        source="docs",
        action="browse",
        entries=[
            {
                "path": doc.file_path,
                "title": doc.title,
                "sections": [
                    {"level": s.level, "title": s.title, "anchor": s.anchor} for s in doc.sections
                ],
                "content": doc.content,
            }
        ],
        summary={"count": 1, "section_count": len(doc.sections)},
    )


def _browse_section(doc_path: str, section_title: str) -> dict[str, Any]:
    """Level 2: One section with structure extracted from its content."""
    doc = GuideSearch.get_document(doc_path)
    if doc is None:
        return _document_not_found(doc_path)

    found = GuideSearch.find_section(doc_path, section_title)
    if found is None:
        return {
            "source": "docs",
            "action": "browse",
            "error": {
                "code": "section_not_found",
                "message": f"No section matching '{section_title}' in '{doc_path}'.",
            },
            "input": {"path": doc_path, "section": section_title},
            "available_sections": [s.title for s in doc.sections],
        }

    return build_guide_data(
        source="docs",
        action="browse",
        entries=[
            {
                "path": doc.file_path,
                **found.to_dict(),
                "tables": [t.to_dict() for t in MarkdownParser.extract_tables(found.content)],
                "code_blocks": [b.to_dict() for b in MarkdownParser.extract_code_blocks(found.content)],
                "links": [
                    {"text": link.text, "url": link.url, "title": link.title}
                    for link in MarkdownParser.extract_links(found.content)
                ],
            }
        ],
        summary={"count": 1},
    )


def _wrap_payload(payload: dict[str, Any]) -> dict[str, Any]:
    if "error" in payload:
        err = payload.get("error") or {}
        details = {k: v for k, v in payload.items() if k != "error"}
        return build_error(
            code=str(err.get("code") or "browse_error"),
            message=str(err.get("message") or "Browse failed"),
            details=details or None,
        )
    return build_ok(payload)
