"""Data models for guide documentation parsing and indexing.

Parser-level records (CodeBlock, Table, Link, MarkdownSection, ApiEndpoint)
are produced on demand from raw markdown. GuideDocument and DocumentSection
are the index-level records owned by DocumentIndexer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CodeBlock:
    """Fenced code block.

    Attributes:
        language: Token following the opening fence (e.g. "javascript",
            "curl"), or None for an unlabeled fence
        code: Verbatim lines between the fences joined with newlines
        line_start: Zero-based index of the opening fence line
        line_end: Zero-based index of the last content line
    """

    language: Optional[str]
    code: str
    line_start: int
    line_end: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "code": self.code,
            "line_start": self.line_start,
            "line_end": self.line_end,
        }


@dataclass(frozen=True)
class TableCell:
    content: str
    is_header: bool = False


@dataclass(frozen=True)
class TableRow:
    cells: List[TableCell]

    def values(self) -> List[str]:
        return [cell.content for cell in self.cells]


@dataclass(frozen=True)
class Table:
    """Pipe table.

    The alignment/separator line is not represented; `rows` holds data
    rows only.
    """

    headers: List[str]
    rows: List[TableRow]
    raw: str

    def to_dict(self, max_rows: Optional[int] = None) -> Dict[str, Any]:
        rows = self.rows if max_rows is None else self.rows[:max_rows]
        return {
            "headers": list(self.headers),
            "rows": [row.values() for row in rows],
            "total_rows": len(self.rows),
        }


@dataclass(frozen=True)
class Link:
    text: str
    url: str
    title: Optional[str] = None


@dataclass(frozen=True)
class MarkdownSection:
    """Heading-delimited run of lines with its line span."""

    level: int
    title: str
    content: str
    line_start: int
    line_end: int


@dataclass(frozen=True)
class DocumentSection:
    """Section record stored on an indexed document.

    Attributes:
        level: Heading level (1-6)
        title: Heading text
        content: Lines between this heading and the next heading of any
            level, joined with newlines
        anchor: URL fragment slug derived from the title
    """

    level: int
    title: str
    content: str
    anchor: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "title": self.title,
            "content": self.content,
            "anchor": self.anchor,
        }


@dataclass(frozen=True)
class GuideDocument:
    """One indexed markdown file.

    Attributes:
        file_path: Path relative to the docs root, "/"-separated (index key)
        absolute_path: Absolute filesystem path
        file_name: Base name of the file
        title: First heading text, or "Untitled"
        content: Full raw content
        sections: Sections in document order
        keywords: Unique lowercase keywords in first-seen order
    """

    file_path: str
    absolute_path: str
    file_name: str
    title: str
    content: str
    sections: List[DocumentSection] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)

    def summary(self, preview_chars: int = 200, max_sections: int = 5) -> Dict[str, Any]:
        """Compact representation used in search listings."""
        preview = self.content[:preview_chars].replace("\n", " ").strip()
        if preview and len(self.content) > preview_chars:
            preview += "..."
        return {
            "path": self.file_path,
            "title": self.title,
            "preview": preview,
            "sections": [
                {"level": s.level, "title": s.title, "anchor": s.anchor}
                for s in self.sections[:max_sections]
            ],
        }


@dataclass(frozen=True)
class ApiEndpoint:
    """Row of an API endpoint table: (api name, method, endpoint)."""

    api: str
    method: str
    endpoint: str

    def to_dict(self) -> Dict[str, str]:
        return {"api": self.api, "method": self.method, "endpoint": self.endpoint}
