"""Markdown structure extraction for guide documents.

Components:
    - MarkdownParser: sections, code blocks, tables, links, endpoint rows
"""

from guide_mcp.docs.markdown.parser import API_DOMAINS, UNTITLED, MarkdownParser

__all__ = [
    "MarkdownParser",
    "API_DOMAINS",
    "UNTITLED",
]
