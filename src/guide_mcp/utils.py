"""Validation models and utilities for Guide MCP tools."""

from typing import Annotated, Optional

from pydantic import Field
from pydantic.functional_validators import AfterValidator


# Search limits
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 20
DEFAULT_SAMPLE_LIMIT = 5
MAX_SAMPLE_LIMIT = 10


def normalize_input(value: Optional[str], lowercase: bool = False) -> str:
    """Normalize user input: collapse whitespace, optionally lowercase."""
    if value is None:
        return ""
    normalized = " ".join(value.split())
    return normalized.lower() if lowercase else normalized


def validate_non_empty_string(value: str) -> str:
    """Validate that a string is not empty after stripping whitespace."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("Value cannot be empty or whitespace only")
    return stripped


def validate_doc_path(value: str) -> str:
    """Validate a guide document key ("api/payment.md")."""
    stripped = validate_non_empty_string(value).replace("\\", "/").lstrip("/")
    if not stripped.endswith(".md"):
        raise ValueError("path must point to a .md document")
    return stripped


# Guide search query
SearchQuery = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(
        ...,
        min_length=1,
        description=(
            "Search keywords for the developer guide. Examples: '결제창', "
            "'취소', 'webhook', 'API'. Case-insensitive."
        ),
    ),
]

# Search limit
SearchLimit = Annotated[
    int,
    Field(
        default=DEFAULT_SEARCH_LIMIT,
        ge=1,
        le=MAX_SEARCH_LIMIT,
        description=f"Maximum number of results (1-{MAX_SEARCH_LIMIT}).",
    ),
]

SampleLimit = Annotated[
    int,
    Field(
        default=DEFAULT_SAMPLE_LIMIT,
        ge=1,
        le=MAX_SAMPLE_LIMIT,
        description=f"Maximum number of code samples (1-{MAX_SAMPLE_LIMIT}).",
    ),
]

EndpointName = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(
        ...,
        min_length=1,
        description="API name as listed in the endpoint catalog. Examples: '결제 승인', '거래 조회', '취소'.",
    ),
]

SampleTopic = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(
        ...,
        min_length=1,
        description="Topic to find code samples for. Examples: '결제창 호출', 'Basic 인증', '결제 승인'.",
    ),
]

LanguageFilter = Annotated[
    Optional[str],
    Field(
        default=None,
        description="Optional code language filter. Examples: 'javascript', 'python', 'curl'.",
    ),
]

SdkMethodName = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(
        ...,
        min_length=1,
        description="JS SDK method name, with or without the AUTHNICE prefix. Examples: 'requestPay', 'cancelPay'.",
    ),
]
