"""High-level guide search interface.

This module answers the questions the MCP tools ask: ranked document
search, API endpoint lookup, code sample lookup and SDK method lookup. It
reads the shared DocumentIndexer and re-parses document content on demand
with MarkdownParser; derived tables and code blocks are never cached.
"""

import logging
import re
from typing import List, Optional

from guide_mcp.config import DEFAULT_API_CATALOG, GuideConfig, get_guide_config
from guide_mcp.docs.indexer import DocumentIndexer
from guide_mcp.docs.markdown import API_DOMAINS, MarkdownParser
from guide_mcp.docs.models import ApiEndpoint, CodeBlock, DocumentSection, GuideDocument, Table
from guide_mcp.docs.query.results import CodeSample, EndpointLookup, SdkMethodLookup, SearchHit

logger = logging.getLogger("guide-mcp.query")

SDK_NAMESPACE = "authnice"
CODE_SAMPLE_KEYWORDS = ("nicepay", "api", "request", "pay", "payment", "curl", "fetch", "axios", "http")
PARAMETER_HEADER_TOKENS = ("parameter", "파라미터", "필수", "type")

# Number of top search results inspected by the sample and SDK lookups
CANDIDATE_DOCS = 10
PREVIEW_CHARS = 500
MAX_REQUEST_ROWS = 10
MAX_ENDPOINT_EXAMPLES = 3
MAX_SUGGESTIONS = 5


def create_indexer(config: GuideConfig, logger: Optional[logging.Logger] = None) -> DocumentIndexer:
    """Build a DocumentIndexer from runtime configuration (not yet indexed)."""
    return DocumentIndexer(
        config.docs_path,
        target_dirs=config.target_dirs,
        skip_dirs=config.skip_dirs,
        root_readme=config.root_readme,
        logger=logger,
    )


class GuideSearch:
    """Query interface over the guide document index.

    Features:
    - Lazy index initialization from environment configuration
    - Single shared indexer for all tools
    - Injectable indexer for tests and embedding (use_indexer)

    Usage:
        >>> hits = GuideSearch.search("결제창", top_k=5)
        >>> hits[0].document.file_path
        'api/payment-window.md'

        >>> lookup = GuideSearch.get_api_endpoint("결제 승인")
        >>> lookup.endpoint.method
        'POST'
    """

    _indexer: DocumentIndexer | None = None
    _api_catalog: str = DEFAULT_API_CATALOG

    @classmethod
    def initialize(cls, config: GuideConfig | None = None) -> DocumentIndexer:
        """Create the shared indexer from config and build it.

        Build failures are logged and leave an empty index; they never
        raise.
        """
        config = config or get_guide_config()
        indexer = create_indexer(config)
        logger.info("Building guide index from %s", config.docs_path)
        if not indexer.build_index():
            logger.warning("Guide index build failed; serving an empty index")
        cls._indexer = indexer
        cls._api_catalog = config.api_catalog
        return indexer

    @classmethod
    def use_indexer(cls, indexer: DocumentIndexer, api_catalog: str = DEFAULT_API_CATALOG) -> None:
        """Install an already-built indexer."""
        cls._indexer = indexer
        cls._api_catalog = api_catalog

    @classmethod
    def reset(cls) -> None:
        cls._indexer = None
        cls._api_catalog = DEFAULT_API_CATALOG

    @classmethod
    def _get_indexer(cls) -> DocumentIndexer:
        if cls._indexer is None:
            cls.initialize()
        assert cls._indexer is not None
        return cls._indexer

    @classmethod
    def rebuild_index(cls) -> bool:
        return cls._get_indexer().build_index()

    @classmethod
    def get_index_size(cls) -> int:
        return cls._get_indexer().get_index_size()

    # ------------------------------------------------------------------
    # Document search and browsing
    # ------------------------------------------------------------------

    @classmethod
    def search(cls, query: str, top_k: int | None = None) -> List[SearchHit]:
        """Ranked documents for a keyword query.

        Args:
            query: Keyword or phrase (case-insensitive substring match)
            top_k: Maximum number of hits, or None for all

        Returns:
            SearchHit list sorted by score (highest first). Empty for a
            blank query or when nothing matches.
        """
        scored = cls._get_indexer().search_with_scores(query.strip())
        if top_k is not None:
            scored = scored[:top_k]
        return [SearchHit(document=doc, score=score, rank=i + 1) for i, (doc, score) in enumerate(scored)]

    @classmethod
    def get_document(cls, file_path: str) -> Optional[GuideDocument]:
        return cls._get_indexer().get_document(file_path)

    @classmethod
    def find_section(cls, file_path: str, section_title: str) -> Optional[DocumentSection]:
        return cls._get_indexer().find_section(file_path, section_title)

    @classmethod
    def list_documents(cls) -> List[GuideDocument]:
        return cls._get_indexer().get_all_documents()

    # ------------------------------------------------------------------
    # API endpoints
    # ------------------------------------------------------------------

    @classmethod
    def get_api_endpoint(cls, endpoint_name: str) -> EndpointLookup:
        """Look up an API in the endpoint catalog and gather its detail page.

        The catalog table must have headers named exactly API, Method and
        Endpoint (case-insensitive). The first row whose API cell contains
        the name wins.
        """
        query = endpoint_name.strip()
        indexer = cls._get_indexer()

        catalog = indexer.get_document(cls._api_catalog)
        if catalog is None:
            return EndpointLookup(status="catalog_missing", query=query)

        table = next(
            (t for t in MarkdownParser.extract_tables(catalog.content) if _is_catalog_table(t)),
            None,
        )
        if table is None:
            return EndpointLookup(status="table_missing", query=query)

        columns = MarkdownParser.endpoint_columns(table)
        assert columns is not None
        api_column = columns[0]
        lowered = query.lower()
        row = next(
            (
                r
                for r in table.rows
                if api_column < len(r.cells) and lowered in r.cells[api_column].content.lower()
            ),
            None,
        )
        if row is None:
            suggestions = indexer.search_documents(query)[:MAX_SUGGESTIONS]
            return EndpointLookup(status="not_found", query=query, suggestions=suggestions)

        cells = row.values()
        endpoint = ApiEndpoint(*(cells[i] if i < len(cells) else "" for i in columns))

        lookup = EndpointLookup(status="found", query=query, endpoint=endpoint)
        lookup.detail = cls._resolve_endpoint_document(endpoint.api)
        if lookup.detail is not None:
            cls._fill_endpoint_detail(lookup, lookup.detail)
        return lookup

    @classmethod
    def _resolve_endpoint_document(cls, api_cell: str) -> Optional[GuideDocument]:
        indexer = cls._get_indexer()
        links = MarkdownParser.extract_links(api_cell)
        if links:
            doc = indexer.get_document(link_to_doc_path(links[0].url))
            if doc is not None:
                return doc

        name = links[0].text if links else api_cell
        results = indexer.search_documents(name)
        return results[0] if results else None

    @staticmethod
    def _fill_endpoint_detail(lookup: EndpointLookup, doc: GuideDocument) -> None:
        request = next(
            (
                s
                for s in doc.sections
                if "요청" in s.title.lower() and ("명세" in s.title.lower() or "파라미터" in s.title.lower())
            ),
            None,
        )
        if request is not None:
            tables = MarkdownParser.extract_tables(request.content)
            if tables:
                lookup.request_table = tables[0]
            else:
                lookup.request_preview = request.content[:PREVIEW_CHARS].strip() or None

        response = next(
            (
                s
                for s in doc.sections
                if "응답" in s.title.lower() and ("명세" in s.title.lower() or "결과" in s.title.lower())
            ),
            None,
        )
        if response is not None:
            lookup.response_preview = response.content[:PREVIEW_CHARS].strip() or None

        lookup.code_examples = MarkdownParser.find_api_code_examples(doc.content, api_domains=API_DOMAINS)[
            :MAX_ENDPOINT_EXAMPLES
        ]

    # ------------------------------------------------------------------
    # Code samples
    # ------------------------------------------------------------------

    @classmethod
    def get_code_samples(cls, topic: str, language: str | None = None) -> List[CodeSample]:
        """Code blocks related to a topic, most relevant first.

        Relevance: +10 when the code mentions the topic, +5 when the block
        language matches the requested one, +3 when the code mentions any
        API keyword. A block with relevance 0 is kept only when it is the
        single block of its document.
        """
        query = topic.strip()
        if not query:
            return []
        lowered = query.lower()
        target_lang = language.lower() if language else None

        samples: List[CodeSample] = []
        for doc in cls._get_indexer().search_documents(query)[:CANDIDATE_DOCS]:
            blocks = (
                MarkdownParser.extract_code_blocks_by_language(doc.content, language)
                if language
                else MarkdownParser.extract_code_blocks(doc.content)
            )
            for block in blocks:
                code = block.code.lower()
                relevance = 0
                if lowered in code:
                    relevance += 10
                if target_lang and block.language and _languages_match(block.language.lower(), target_lang):
                    relevance += 5
                if any(keyword in code for keyword in CODE_SAMPLE_KEYWORDS):
                    relevance += 3

                if relevance > 0 or len(blocks) == 1:
                    samples.append(
                        CodeSample(
                            document=doc,
                            block=block,
                            relevance=relevance,
                            description=_describe_block(doc, block),
                        )
                    )

        samples.sort(key=lambda sample: sample.relevance, reverse=True)
        return samples

    # ------------------------------------------------------------------
    # SDK methods
    # ------------------------------------------------------------------

    @classmethod
    def get_sdk_method(cls, method_name: str) -> Optional[SdkMethodLookup]:
        """Find the document that best describes a JS SDK method.

        "AUTHNICE.requestPay", "authnice.requestPay" and "requestPay" are
        equivalent.
        """
        query = method_name.strip().lower()
        clean = normalize_sdk_method(query)
        if not clean:
            return None

        search_queries = [f"{SDK_NAMESPACE}.{clean}", clean]
        if "request" in query:
            search_queries.append("결제창")
        if "cancel" in query:
            search_queries.append("취소")

        indexer = cls._get_indexer()
        unique: dict[str, GuideDocument] = {}
        for search_query in search_queries:
            for doc in indexer.search_documents(search_query):
                unique.setdefault(doc.file_path, doc)

        qualified = f"{SDK_NAMESPACE}.{clean}"
        candidates: List[SdkMethodLookup] = []
        for doc in list(unique.values())[:CANDIDATE_DOCS]:
            content = doc.content.lower()
            if qualified not in content and clean not in content:
                continue

            sections = [
                s
                for s in doc.sections
                if any(token in s.content.lower() for token in (clean, SDK_NAMESPACE, "js sdk", "결제창"))
            ]
            blocks = [
                block
                for block in (
                    MarkdownParser.extract_code_blocks_by_language(doc.content, "javascript")
                    + MarkdownParser.extract_code_blocks_by_language(doc.content, "html")
                )
                if clean in block.code.lower() or SDK_NAMESPACE in block.code.lower()
            ]

            relevance = len(sections)
            if qualified in content:
                relevance += 20
            if clean in content:
                relevance += 10
            if blocks:
                relevance += 5

            candidates.append(
                SdkMethodLookup(
                    method_name=clean,
                    document=doc,
                    relevance=relevance,
                    description=_describe_sections(sections),
                    code_examples=blocks,
                    sections=sections,
                )
            )

        if not candidates:
            return None

        candidates.sort(key=lambda c: c.relevance, reverse=True)
        best = candidates[0]
        best.parameter_table = _find_parameter_table(best.document.content)
        best.related = [c.document for c in candidates[1:4]]
        return best


def normalize_sdk_method(name: str) -> str:
    """Strip the SDK namespace prefix from a method name (lowercased)."""
    cleaned = re.sub(rf"^{SDK_NAMESPACE}\.?", "", name.strip().lower())
    return re.sub(r"^\.", "", cleaned)


def link_to_doc_path(url: str) -> str:
    """Map a guide link ("/api/payment#approve") to an index key ("api/payment.md")."""
    path = url.split("#")[0]
    if path.startswith("/"):
        path = path[1:]
    if not path.endswith(".md") and "." not in path:
        path += ".md"
    return path


def _is_catalog_table(table: Table) -> bool:
    headers = {h.lower() for h in table.headers}
    return {"api", "method", "endpoint"} <= headers


def _languages_match(block_lang: str, target_lang: str) -> bool:
    return block_lang == target_lang or target_lang in block_lang or block_lang in target_lang


def _describe_block(doc: GuideDocument, block: CodeBlock) -> Optional[str]:
    head = block.code[:50].lower()
    section = next((s for s in doc.sections if head in s.content.lower()), None)
    if section is None:
        return None
    description = section.content[:200].strip()
    if description and block.code[:30].lower() not in description.lower():
        return description
    return None


def _describe_sections(sections: List[DocumentSection]) -> str:
    description = ""
    for section in sections[:3]:
        if len(section.content) > 100:
            return section.content[:PREVIEW_CHARS].strip()
        description += section.content + " "
    return description.strip()


def _find_parameter_table(content: str) -> Optional[Table]:
    for table in MarkdownParser.extract_tables(content):
        headers = [h.lower() for h in table.headers]
        if any(token in h for h in headers for token in PARAMETER_HEADER_TOKENS):
            return table
    return None
