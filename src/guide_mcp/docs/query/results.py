"""Result models returned by GuideSearch."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from guide_mcp.docs.models import ApiEndpoint, CodeBlock, DocumentSection, GuideDocument, Table


@dataclass
class SearchHit:
    """Ranked search match.

    Attributes:
        document: Matched document
        score: Additive relevance score (see keyword_matcher)
        rank: 1-based position in the result list
    """

    document: GuideDocument
    score: int
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {**self.document.summary(), "score": self.score, "rank": self.rank}


@dataclass
class EndpointLookup:
    """Outcome of an API endpoint lookup.

    status is one of:
        - "found": endpoint row matched (detail fields may still be empty)
        - "not_found": no catalog row matched; suggestions lists related docs
        - "catalog_missing": the API catalog document is not indexed
        - "table_missing": the catalog has no API/Method/Endpoint table
    """

    status: str
    query: str
    endpoint: Optional[ApiEndpoint] = None
    detail: Optional[GuideDocument] = None
    request_table: Optional[Table] = None
    request_preview: Optional[str] = None
    response_preview: Optional[str] = None
    code_examples: List[CodeBlock] = field(default_factory=list)
    suggestions: List[GuideDocument] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status == "found"


@dataclass
class CodeSample:
    document: GuideDocument
    block: CodeBlock
    relevance: int
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.document.file_path,
            "title": self.document.title,
            "language": self.block.language,
            "code": self.block.code,
            "relevance": self.relevance,
            "description": self.description,
        }


@dataclass
class SdkMethodLookup:
    """Best document describing an SDK method, with supporting material."""

    method_name: str
    document: GuideDocument
    relevance: int
    description: str = ""
    code_examples: List[CodeBlock] = field(default_factory=list)
    sections: List[DocumentSection] = field(default_factory=list)
    parameter_table: Optional[Table] = None
    related: List[GuideDocument] = field(default_factory=list)
