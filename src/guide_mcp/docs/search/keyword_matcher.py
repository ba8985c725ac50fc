"""Keyword extraction and relevance scoring for guide documents.

Scoring is a plain additive heuristic over case-insensitive substring
checks. There is no stemming, no token index and no fuzzy matching: short
queries contained in many keywords rank highest.
"""

import re
from typing import List

from guide_mcp.docs.models import GuideDocument

# Hangul syllable runs, or Latin words optionally followed by letters/digits
CONTENT_WORD_PATTERN = re.compile(r"[가-힣]+|[a-zA-Z]+[a-zA-Z0-9]*")

MAX_CONTENT_KEYWORDS = 50

TITLE_WEIGHT = 10
FILE_NAME_WEIGHT = 5
KEYWORD_WEIGHT = 1
CONTENT_WEIGHT = 1


def extract_keywords(title: str, content: str) -> List[str]:
    """Extract lowercase keywords from a document title and body.

    Title words longer than one character come first, then body words
    longer than two characters. Only the first 50 body words found in
    scan order are kept. Duplicates are removed, keeping first occurrence.

    Examples:
        >>> extract_keywords("Payment API", "결제창API 호출하기 ok")
        ['payment', 'api', '결제창', '호출하기']
    """
    keywords: dict[str, None] = {}

    for word in title.split():
        if len(word) > 1:
            keywords.setdefault(word.lower(), None)

    words = [w for w in CONTENT_WORD_PATTERN.findall(content) if len(w) > 2]
    for word in words[:MAX_CONTENT_KEYWORDS]:
        keywords.setdefault(word.lower(), None)

    return list(keywords)


def calculate_relevance_score(document: GuideDocument, query: str) -> int:
    """Score a document against a query.

    Score breakdown:
        - +10 when the title contains the query
        - +5 when the file name contains the query
        - +1 for every keyword containing the query
        - +1 when the content contains the query

    A blank query scores 0.

    Examples:
        >>> # title "Payment Window", keywords ["payment", "window", "paypal"]
        >>> calculate_relevance_score(doc, "pay")
        13  # title 10 + keywords 2 + content 1
    """
    needle = query.lower()
    if not needle.strip():
        return 0

    score = 0
    if needle in document.title.lower():
        score += TITLE_WEIGHT
    if needle in document.file_name.lower():
        score += FILE_NAME_WEIGHT
    score += KEYWORD_WEIGHT * sum(1 for keyword in document.keywords if needle in keyword)
    if needle in document.content.lower():
        score += CONTENT_WEIGHT
    return score
