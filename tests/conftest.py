"""Shared fixtures: a small developer guide tree on disk."""

from pathlib import Path

import pytest

from guide_mcp.docs.indexer import DocumentIndexer
from guide_mcp.docs.query import GuideSearch

FENCE = "```"

GUIDE_FILES = {
    "README.md": "# Developer Guide\n\nStart here for payment integration.\n",
    "api/foo.md": (
        "# Foo Title\n"
        "Foo endpoint overview.\n"
        f"{FENCE}javascript\n"
        "const res = await fetch('/v1/foo');\n"
        f"{FENCE}\n"
    ),
    "api/payment.md": (
        "# 결제 승인 API\n"
        "\n"
        "결제 승인을 요청합니다.\n"
        "\n"
        "## 요청 명세\n"
        "\n"
        "| 파라미터 | 타입 | 필수 | 설명 |\n"
        "|---|---|---|---|\n"
        "| amount | Int | O | 결제 금액 |\n"
        "| orderId | String | O | 주문번호 |\n"
        "\n"
        "## 응답 명세\n"
        "\n"
        "resultCode가 0000이면 성공입니다.\n"
        "\n"
        "## 샘플 코드\n"
        "\n"
        f"{FENCE}bash\n"
        "curl -X POST https://sandbox-api.nicepay.co.kr/v1/payments/tid\n"
        f"{FENCE}\n"
    ),
    "api/cancel.md": (
        "# 취소 API\n"
        "\n"
        "승인된 결제를 취소합니다.\n"
    ),
    "api/image/diagram.md": "# Diagram Notes\n\nshould never be indexed\n",
    "api/node_modules/pkg/readme.md": "# Vendored Package\n",
    "api/notes.txt": "# Not markdown\n",
    "common/api.md": (
        "# API 목록\n"
        "\n"
        "## URI 목록\n"
        "\n"
        "| API | Method | Endpoint |\n"
        "|---|---|---|\n"
        "| [결제 승인](/api/payment#approve) | POST | /v1/payments/{tid} |\n"
        "| [거래 조회](/api/inquiry.md) | GET | /v1/payments/{tid} |\n"
        "| [취소](/api/cancel) | POST | /v1/payments/{tid}/cancel |\n"
    ),
    "common/js-sdk.md": (
        "# JS SDK\n"
        "\n"
        "결제창은 JS SDK로 호출합니다.\n"
        "\n"
        "## requestPay\n"
        "\n"
        "AUTHNICE.requestPay 메서드는 결제창을 띄웁니다.\n"
        "\n"
        "| Parameter | Type | 필수 |\n"
        "|---|---|---|\n"
        "| clientId | String | O |\n"
        "| method | String | O |\n"
        "\n"
        f"{FENCE}javascript\n"
        "AUTHNICE.requestPay({\n"
        "  clientId: 'S2_xxx',\n"
        "  method: 'card',\n"
        "});\n"
        f"{FENCE}\n"
    ),
    "common/dist/bundle.md": "# Built Output\n",
    "migration/v2.md": "# Migration Guide\n\nMove from v1 to v2.\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def guide_root(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "guide", GUIDE_FILES)


@pytest.fixture
def indexer(guide_root: Path) -> DocumentIndexer:
    indexer = DocumentIndexer(guide_root)
    assert indexer.build_index() is True
    return indexer


@pytest.fixture
def guide_search(indexer: DocumentIndexer):
    GuideSearch.use_indexer(indexer)
    yield GuideSearch


@pytest.fixture(autouse=True)
def _reset_guide_search():
    yield
    GuideSearch.reset()
