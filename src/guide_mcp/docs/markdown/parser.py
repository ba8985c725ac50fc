"""Structural markdown parser for guide documents.

This module extracts the structure the guide tools rely on from raw
markdown text: heading sections, fenced code blocks, pipe tables and links,
plus the table-driven extraction of API endpoint rows.

Only the constructs used by the guide documents are recognized. Parsing is
line based and never raises on malformed input; unrecognized constructs are
treated as plain text.
"""

import re
from typing import List, Optional, Tuple

from guide_mcp.docs.models import (
    ApiEndpoint,
    CodeBlock,
    DocumentSection,
    Link,
    MarkdownSection,
    Table,
    TableCell,
    TableRow,
)

UNTITLED = "Untitled"

# Substrings that mark a code block as an API call example
API_EXAMPLE_TOKENS = ("curl", "fetch", "axios", "http", "post", "get")
API_DOMAINS = ("api.nicepay", "sandbox-api.nicepay")


class MarkdownParser:
    """Line-based extractor for markdown structure.

    All methods are static and re-parse the given text on every call;
    nothing is cached.

    Usage:
        >>> blocks = MarkdownParser.extract_code_blocks(doc.content)
        >>> tables = MarkdownParser.extract_tables(section.content)
        >>> endpoints = MarkdownParser.extract_api_endpoints(doc.content)
    """

    HEADING_PATTERN = re.compile(r"(#{1,6})\s+(\S.*)")
    FENCE_OPEN_PATTERN = re.compile(r"```([A-Za-z0-9_]+)?\s*")
    FENCE_CLOSE = "```"

    INLINE_LINK_PATTERN = re.compile(r'\[([^\]]+)\]\(\s*([^)]+?)(?:\s+"([^"]*)")?\s*\)')
    REFERENCE_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\[([^\]]+)\]")

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    @staticmethod
    def match_heading(line: str) -> Optional[Tuple[int, str]]:
        """Return (level, title) when the line is an ATX heading."""
        match = MarkdownParser.HEADING_PATTERN.fullmatch(line)
        if not match:
            return None
        return len(match.group(1)), match.group(2).strip()

    @staticmethod
    def extract_sections(content: str) -> List[MarkdownSection]:
        """Split a document into heading-delimited sections.

        A section's content runs until the next heading of any level, so
        nesting is not represented. Lines before the first heading are
        dropped.

        Example:
            >>> sections = MarkdownParser.extract_sections("# A\\ntext\\n## B\\nmore")
            >>> [(s.level, s.title, s.content) for s in sections]
            [(1, 'A', 'text'), (2, 'B', 'more')]
        """
        lines = content.split("\n")
        sections: List[MarkdownSection] = []
        current: Optional[Tuple[int, str, int]] = None
        collected: List[str] = []

        for i, line in enumerate(lines):
            heading = MarkdownParser.match_heading(line)
            if heading:
                if current is not None:
                    level, title, start = current
                    sections.append(
                        MarkdownSection(level, title, "\n".join(collected), start, i - 1)
                    )
                current = (heading[0], heading[1], i)
                collected = []
            elif current is not None:
                collected.append(line)

        if current is not None:
            level, title, start = current
            sections.append(
                MarkdownSection(level, title, "\n".join(collected), start, len(lines) - 1)
            )

        return sections

    @staticmethod
    def split_into_sections(content: str) -> Tuple[str, List[DocumentSection]]:
        """Return the document title and its anchored sections.

        The first heading seen becomes the title whatever its level.
        """
        sections = [
            DocumentSection(
                level=section.level,
                title=section.title,
                content=section.content,
                anchor=MarkdownParser.generate_anchor(section.title),
            )
            for section in MarkdownParser.extract_sections(content)
        ]
        title = sections[0].title if sections else UNTITLED
        return title, sections

    @staticmethod
    def generate_anchor(title: str) -> str:
        """Build a URL fragment slug from a heading title.

        Example:
            >>> MarkdownParser.generate_anchor("Request  Spec (v2)!")
            'request-spec-v2'
        """
        anchor = title.lower()
        anchor = re.sub(r"[^\w\s-]", "", anchor)
        anchor = re.sub(r"\s+", "-", anchor)
        anchor = re.sub(r"-+", "-", anchor)
        return anchor.strip("-")

    @staticmethod
    def find_sections_by_keyword(content: str, keyword: str) -> List[MarkdownSection]:
        """Sections whose title or content contains the keyword (case-insensitive)."""
        lower_keyword = keyword.lower()
        return [
            section
            for section in MarkdownParser.extract_sections(content)
            if lower_keyword in section.title.lower() or lower_keyword in section.content.lower()
        ]

    # ------------------------------------------------------------------
    # Code blocks
    # ------------------------------------------------------------------

    @staticmethod
    def extract_code_blocks(content: str) -> List[CodeBlock]:
        """Extract fenced code blocks.

        Fences do not nest: inside a block only a bare ``` line closes it,
        and anything else (including ```lang lines) is content. A block
        left open at the end of input is kept if it has content.
        """
        lines = content.split("\n")
        blocks: List[CodeBlock] = []

        in_block = False
        language: Optional[str] = None
        start = 0
        code_lines: List[str] = []

        for i, line in enumerate(lines):
            if not in_block:
                opening = MarkdownParser.FENCE_OPEN_PATTERN.fullmatch(line)
                if opening:
                    in_block = True
                    language = opening.group(1)
                    start = i
                    code_lines = []
                continue

            if line.strip() == MarkdownParser.FENCE_CLOSE:
                blocks.append(CodeBlock(language, "\n".join(code_lines), start, i - 1))
                in_block = False
                language = None
                code_lines = []
                continue

            code_lines.append(line)

        if in_block and code_lines:
            blocks.append(CodeBlock(language, "\n".join(code_lines), start, len(lines) - 1))

        return blocks

    @staticmethod
    def extract_code_blocks_by_language(content: str, language: str) -> List[CodeBlock]:
        """Blocks whose language matches loosely ("python" matches "python3" and vice versa)."""
        wanted = language.lower()
        matches = []
        for block in MarkdownParser.extract_code_blocks(content):
            if not block.language:
                continue
            lang = block.language.lower()
            if lang == wanted or wanted in lang or lang in wanted:
                matches.append(block)
        return matches

    @staticmethod
    def find_api_code_examples(
        content: str,
        language: Optional[str] = None,
        api_domains: Tuple[str, ...] = API_DOMAINS,
    ) -> List[CodeBlock]:
        """Code blocks that look like API calls (curl, fetch, HTTP verbs, API hosts)."""
        blocks = (
            MarkdownParser.extract_code_blocks_by_language(content, language)
            if language
            else MarkdownParser.extract_code_blocks(content)
        )
        vocabulary = API_EXAMPLE_TOKENS + tuple(api_domains)
        return [
            block for block in blocks if any(token in block.code.lower() for token in vocabulary)
        ]

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    @staticmethod
    def extract_tables(content: str) -> List[Table]:
        """Extract pipe tables.

        A table starts on a line that begins and ends with "|"; lines that
        only begin with "|" continue an open table. Runs shorter than two
        lines (no separator row) are dropped.
        """
        tables: List[Table] = []
        current: List[str] = []

        def flush() -> None:
            if len(current) >= 2:
                table = MarkdownParser.parse_table("\n".join(current))
                if table:
                    tables.append(table)
            current.clear()

        for line in content.split("\n"):
            stripped = line.strip()
            if stripped.startswith("|") and stripped.endswith("|"):
                current.append(line)
            elif stripped.startswith("|") and current:
                current.append(line)
            else:
                flush()

        flush()
        return tables

    @staticmethod
    def _split_cells(line: str) -> List[str]:
        return [cell.strip() for cell in line.split("|") if cell.strip()]

    @staticmethod
    def parse_table(table_text: str) -> Optional[Table]:
        """Parse a table block: header line, separator line, data rows.

        Empty cells are dropped, so rows with blank cells come out shorter
        than the header.
        """
        lines = [line for line in table_text.strip().split("\n") if line.strip()]
        if len(lines) < 2:
            return None

        headers = MarkdownParser._split_cells(lines[0])
        rows: List[TableRow] = []
        for row_line in lines[2:]:
            cells = [TableCell(content=cell) for cell in MarkdownParser._split_cells(row_line)]
            if cells:
                rows.append(TableRow(cells=cells))

        return Table(headers=headers, rows=rows, raw=table_text)

    @staticmethod
    def find_header_index(table: Table, *names: str) -> int:
        """Index of the first header containing any of the names, or -1."""
        for index, header in enumerate(table.headers):
            lowered = header.lower()
            if any(name.lower() in lowered for name in names):
                return index
        return -1

    @staticmethod
    def find_table_column(table: Table, column_name: str) -> List[str]:
        """Non-empty cell values of the first column whose header contains column_name."""
        column = MarkdownParser.find_header_index(table, column_name)
        if column == -1:
            return []
        values = [row.cells[column].content if column < len(row.cells) else "" for row in table.rows]
        return [value for value in values if value]

    @staticmethod
    def _cell(row: TableRow, index: int) -> str:
        return row.cells[index].content if 0 <= index < len(row.cells) else ""

    @staticmethod
    def endpoint_columns(table: Table) -> Optional[Tuple[int, int, int]]:
        """Column indices (api, method, endpoint) when the table is an endpoint table."""
        api_index = MarkdownParser.find_header_index(table, "api", "기능")
        method_index = MarkdownParser.find_header_index(table, "method")
        endpoint_index = MarkdownParser.find_header_index(table, "endpoint", "url")
        if -1 in (api_index, method_index, endpoint_index):
            return None
        return api_index, method_index, endpoint_index

    @staticmethod
    def endpoint_from_row(row: TableRow, columns: Tuple[int, int, int]) -> Optional[ApiEndpoint]:
        api, method, endpoint = (MarkdownParser._cell(row, index) for index in columns)
        if not (api and method and endpoint):
            return None
        return ApiEndpoint(api=api, method=method, endpoint=endpoint)

    @staticmethod
    def extract_api_endpoints(content: str) -> List[ApiEndpoint]:
        """Collect (api, method, endpoint) rows from every endpoint table.

        Example:
            >>> text = "| API | Method | Endpoint |\\n|---|---|---|\\n| Approve | POST | /v1/payments |"
            >>> MarkdownParser.extract_api_endpoints(text)
            [ApiEndpoint(api='Approve', method='POST', endpoint='/v1/payments')]
        """
        endpoints: List[ApiEndpoint] = []
        for table in MarkdownParser.extract_tables(content):
            columns = MarkdownParser.endpoint_columns(table)
            if columns is None:
                continue
            for row in table.rows:
                endpoint = MarkdownParser.endpoint_from_row(row, columns)
                if endpoint:
                    endpoints.append(endpoint)
        return endpoints

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    @staticmethod
    def extract_links(content: str) -> List[Link]:
        """Extract inline links, then resolvable reference-style links.

        Only a double-quoted title is split off an inline target; anything
        else inside the parentheses (spaces, single-quoted titles) is kept
        as the raw URL. Reference links without a matching "[ref]: url"
        definition are dropped.
        """
        links = [
            Link(text=match.group(1), url=match.group(2), title=match.group(3) or None)
            for match in MarkdownParser.INLINE_LINK_PATTERN.finditer(content)
        ]

        for match in MarkdownParser.REFERENCE_LINK_PATTERN.finditer(content):
            definition = re.search(rf"\[{re.escape(match.group(2))}\]:\s+(\S+)", content)
            if definition:
                links.append(Link(text=match.group(1), url=definition.group(1)))

        return links
