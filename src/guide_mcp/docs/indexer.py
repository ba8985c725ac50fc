"""In-memory index of guide markdown documents.

The indexer walks a fixed set of top-level directories under the docs root,
parses every markdown file into a GuideDocument and keeps them in an
insertion-ordered dict keyed by the "/"-separated path relative to the root.

Responsibilities:
- Recursive directory walk with name-based pruning
- Per-file parsing (title, sections, keywords)
- Lookup by path, section lookup, scored keyword search

The index is rebuilt wholesale. A rebuild fills a new dict and swaps it in
at the end, so readers see either the old or the new index, never a partial
one. Rebuilds must not run concurrently with each other.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from guide_mcp.config import DEFAULT_ROOT_README, DEFAULT_SKIP_DIRS, DEFAULT_TARGET_DIRS
from guide_mcp.docs.markdown import MarkdownParser
from guide_mcp.docs.models import DocumentSection, GuideDocument
from guide_mcp.docs.search import calculate_relevance_score, extract_keywords

MARKDOWN_SUFFIX = ".md"


class DocumentIndexer:
    """Builds and queries the guide document index.

    Usage:
        >>> indexer = DocumentIndexer("/path/to/guide")
        >>> indexer.build_index()
        True
        >>> indexer.get_document("api/payment.md").title
        'Payment API'
        >>> [doc.file_path for doc in indexer.search_documents("cancel")]
        ['api/cancel.md', 'common/api.md']
    """

    def __init__(
        self,
        docs_base_path: str | Path,
        *,
        target_dirs: Iterable[str] = DEFAULT_TARGET_DIRS,
        skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
        root_readme: str = DEFAULT_ROOT_README,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize an empty index.

        Args:
            docs_base_path: Root directory of the guide
            target_dirs: Top-level directories to walk (missing ones are skipped)
            skip_dirs: Directory names pruned at any depth
            root_readme: File at the root indexed after the walk
            logger: Logger for build progress and per-file failures
        """
        self.docs_base_path = Path(docs_base_path)
        self.target_dirs = tuple(target_dirs)
        self.skip_dirs = frozenset(skip_dirs)
        self.root_readme = root_readme
        self.logger = logger or logging.getLogger("guide-mcp.indexer")
        self._index: dict[str, GuideDocument] = {}

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build_index(self) -> bool:
        """Rebuild the index from the docs root.

        Returns:
            True when the new index was installed. False when the build
            failed; the previous index is then left untouched.
        """
        if not self.docs_base_path.is_dir():
            self.logger.error("Docs base path is not a directory: %s", self.docs_base_path)
            return False

        index: dict[str, GuideDocument] = {}
        try:
            for directory in self.target_dirs:
                dir_path = self.docs_base_path / directory
                if dir_path.is_dir():
                    self._index_directory(index, dir_path, directory)
                else:
                    self.logger.debug("Skipping missing directory: %s", dir_path)

            readme = self.docs_base_path / self.root_readme
            if readme.is_file():
                self._index_file(index, readme, self.root_readme)
        except Exception:
            self.logger.exception("Index build failed under %s", self.docs_base_path)
            return False

        self._index = index
        self.logger.info("Indexed %d markdown file(s) from %s", len(index), self.docs_base_path)
        return True

    def _index_directory(
        self, index: dict[str, GuideDocument], dir_path: Path, relative_base: str
    ) -> None:
        for entry in sorted(dir_path.iterdir(), key=lambda p: p.name):
            relative_path = f"{relative_base}/{entry.name}"
            if entry.is_dir():
                if entry.name not in self.skip_dirs:
                    self._index_directory(index, entry, relative_path)
            elif entry.is_file() and entry.name.endswith(MARKDOWN_SUFFIX):
                self._index_file(index, entry, relative_path)

    def _index_file(
        self, index: dict[str, GuideDocument], file_path: Path, relative_path: str
    ) -> None:
        try:
            content = file_path.read_text(encoding="utf-8")
            title, sections = self.parse_markdown(content)
        except (OSError, ValueError) as exc:
            self.logger.error("Failed to index %s: %s", file_path, exc)
            return

        index[relative_path] = GuideDocument(
            file_path=relative_path,
            absolute_path=str(file_path.resolve()),
            file_name=file_path.name,
            title=title,
            content=content,
            sections=sections,
            keywords=extract_keywords(title, content),
        )

    @staticmethod
    def parse_markdown(content: str) -> Tuple[str, List[DocumentSection]]:
        """Return (title, sections) for a markdown document."""
        return MarkdownParser.split_into_sections(content)

    def clear(self) -> None:
        self._index = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_documents(self) -> List[GuideDocument]:
        return list(self._index.values())

    def get_document(self, file_path: str) -> Optional[GuideDocument]:
        return self._index.get(file_path)

    def get_index_size(self) -> int:
        return len(self._index)

    def search_with_scores(self, query: str) -> List[Tuple[GuideDocument, int]]:
        """Score every document and return matches, best first.

        Ties keep index order.
        """
        scored = []
        for doc in self._index.values():
            score = calculate_relevance_score(doc, query)
            if score > 0:
                scored.append((doc, score))
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored

    def search_documents(self, query: str) -> List[GuideDocument]:
        """Documents matching the query, best first. Blank queries match nothing."""
        return [doc for doc, _ in self.search_with_scores(query)]

    def find_section(self, file_path: str, section_title: str) -> Optional[DocumentSection]:
        """First section of the document whose title contains section_title."""
        doc = self.get_document(file_path)
        if doc is None:
            return None
        wanted = section_title.lower()
        for section in doc.sections:
            if wanted in section.title.lower():
                return section
        return None
