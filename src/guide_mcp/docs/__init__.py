"""Guide documentation system: markdown parsing, indexing and search."""

from guide_mcp.docs.indexer import DocumentIndexer

__all__ = ["DocumentIndexer"]
